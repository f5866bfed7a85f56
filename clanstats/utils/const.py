"""constants shared across the package"""
LOGGER_NAME = "clanstats"

TAG_SIGIL = "#"

DEFAULT_FILENAME = "storage.json"
CONTENT_TYPE = "application/json"

# HTTP backend
MAX_RETRIES = 5
RETRY_STATUS_CODES = (429, 503, 504)
DEFAULT_RATE_LIMIT = 10
REQUEST_TIMEOUT = 30
