"""storage backends, all implementing StorageBackend"""
from clanstats.backends.base import StorageBackend
from clanstats.backends.files import FileStorage
from clanstats.backends.http import HttpStorage
from clanstats.backends.replicated import Replicated
from clanstats.backends.s3 import S3Storage

__all__ = ["StorageBackend", "FileStorage", "HttpStorage", "Replicated", "S3Storage"]
