"""Command line tool to inspect and maintain stored clan stats.
   Every option can also be set through environment variables."""

import logging
import os
import sys
import argparse

import asyncio
from aiolimiter import AsyncLimiter

from discord_logging.handler import DiscordHandler

from clanstats.sane_argument_parser import SaneArgumentParser
from clanstats.backends import FileStorage, HttpStorage, Replicated, S3Storage, StorageBackend
from clanstats.models import Season, Storage
from clanstats.utils.const import DEFAULT_FILENAME, DEFAULT_RATE_LIMIT, LOGGER_NAME
from clanstats.utils.enums import ErrorKind
from clanstats.utils.errors import ReplicationError, StorageError

logger = logging.getLogger(LOGGER_NAME)

console_handler = logging.StreamHandler(sys.stdout)
console_foramt = logging.Formatter(fmt="%(asctime)s - [%(levelname)s] - %(message)s",
                                   datefmt='%Y/%m/%d %H:%M:%S')
console_handler.setFormatter(console_foramt)
logger.addHandler(console_handler)

def setup_logging(log_level: str, discord_logging_url: str = "") -> None:
    """set the log level and attach the discord handler if configured"""
    logger.setLevel(log_level.upper())

    if discord_logging_url:
        discord_handler = DiscordHandler(service_name="clanstats",
                                         webhook_url=discord_logging_url)
        discord_formatter = logging.Formatter(fmt="%(message)s",
                                              datefmt='%Y/%m/%d %H:%M:%S')
        discord_handler.setFormatter(discord_formatter)
        # debug logs would flood the webhook, replica failures are warnings
        discord_handler.setLevel(logging.INFO)
        logger.addHandler(discord_handler)
        logger.debug("Attached discord logger")

def get_arguments(argv=None) -> argparse.Namespace:
    ''' Parse arguments from CLI or if none supplied get them from Environmental variables'''
    parser = SaneArgumentParser(
        prog="clanstats",
        description="Inspect and maintain the season stats of tracked clans. \
                     Several storage locations are kept in sync as replicas.")
    parser.add_argument('--log-level',
                        choices=['critical', 'warning', 'error', 'info', 'debug'],
                        type=str.lower,
                        help="Verbosity of logging",
                        default=os.environ.get("LOG_LEVEL", "info"))
    parser.add_argument('--discord-logging-url',
                        type=str,
                        help="Discord channel to send logging data to",
                        default=os.environ.get("DISCORD_LOGGING_WEBHOOK", ''))
    parser.add_argument('--files',
                        type=SaneArgumentParser.comma_list,
                        help="Comma separated list of local storage files",
                        default=os.environ.get("STORAGE_FILES", ''))
    parser.add_argument('--s3-bucket',
                        type=str,
                        help="S3 bucket to store the stats in",
                        default=os.environ.get("S3_BUCKET", ''))
    parser.add_argument('--s3-key',
                        type=str,
                        help="Object key inside the S3 bucket",
                        default=os.environ.get("S3_KEY", DEFAULT_FILENAME))
    parser.add_argument('--s3-endpoint-url',
                        type=str,
                        help="Endpoint of an S3 compatible service",
                        default=os.environ.get("S3_ENDPOINT_URL", ''))
    parser.add_argument('--urls',
                        type=SaneArgumentParser.comma_list,
                        help="Comma separated list of urls accepting GET and PUT",
                        default=os.environ.get("STORAGE_URLS", ''))
    parser.add_argument('--rate-limit',
                        type=SaneArgumentParser.non_negative_int,
                        help="Rate limit in requests per second for url storage",
                        default=os.environ.get("STORAGE_RATE_LIMIT", DEFAULT_RATE_LIMIT))

    commands = parser.add_subparsers(dest="command", required=True)

    register = commands.add_parser("register", help="Start tracking a clan")
    register.add_argument("--clan", type=SaneArgumentParser.clan_tag, help="Clan tag, e.g. #2PP")

    summary = commands.add_parser("summary", help="Show what every member contributed")
    summary.add_argument("--clan", type=SaneArgumentParser.clan_tag, help="Clan tag, e.g. #2PP")
    summary.add_argument("--season",
                         type=SaneArgumentParser.season,
                         help="Season as YYYY-MM, defaults to the current one",
                         default=str(Season.current()))

    seasons = commands.add_parser("seasons", help="List the seasons stored for a clan")
    seasons.add_argument("--clan", type=SaneArgumentParser.clan_tag, help="Clan tag, e.g. #2PP")

    copy = commands.add_parser("copy", help="Copy the stored stats into a local file")
    copy.add_argument("--to-file", type=str, help="File the stats are written to")

    args = parser.parse_args(argv)
    return args

def build_backend(args: argparse.Namespace) -> StorageBackend:
    """Create a backend for every configured location.
    Order is the priority used for loading: files, s3, urls"""
    backends = [FileStorage(path) for path in args.files]
    if args.s3_bucket:
        backends.append(S3Storage(args.s3_bucket, args.s3_key,
                                  endpoint_url=args.s3_endpoint_url or None))
    if args.urls:
        limiter = AsyncLimiter(max_rate=max(args.rate_limit, 1), time_period=1)
        backends.extend(HttpStorage(url, limiter=limiter) for url in args.urls)

    if len(backends) == 0:
        raise ValueError("No storage configured. Use --files, --s3-bucket or --urls")
    if len(backends) == 1:
        return backends[0]
    return Replicated(backends)

def nothing_stored(error: Exception) -> bool:
    """True if the load failed only because no backend had anything stored yet"""
    if isinstance(error, ReplicationError):
        return all(nothing_stored(failure) for _, failure in error.failures)
    return isinstance(error, StorageError) and error.kind == ErrorKind.NOT_FOUND

async def load_or_empty(backend: StorageBackend) -> Storage:
    """load stored stats, start from scratch if nothing was stored yet"""
    try:
        return await Storage.load(backend)
    except StorageError as se:
        if not nothing_stored(se):
            raise
        logger.info("No stored stats found, starting with an empty storage")
        return Storage.empty()

async def register(args: argparse.Namespace, backend: StorageBackend) -> None:
    storage = await load_or_empty(backend)
    storage.register_clan(args.clan)
    await storage.save(backend)
    logger.info("Registered clan %s", args.clan)

async def summary(args: argparse.Namespace, backend: StorageBackend) -> None:
    storage = await Storage.load(backend)
    clan_storage = storage.get(args.clan, args.season)
    if clan_storage is None:
        logger.warning("No stats for clan %s in season %s", args.clan, args.season)
        return
    print(f"{'tag':<12} {'name':<16} {'cwl':>5} {'war':>5} {'loot':>9} {'games':>6}")
    for tag, player in sorted(clan_storage.players_summary(), key=lambda item: item[0]):
        name = clan_storage.player_names[tag]
        print(f"{tag:<12} {name:<16} {player.cwl_stars:>5} {player.war_stars:>5} "
              f"{player.raid_loot:>9} {player.games_score:>6}")

async def seasons(args: argparse.Namespace, backend: StorageBackend) -> None:
    storage = await Storage.load(backend)
    if args.clan not in storage.registered_clans():
        logger.warning("Clan %s is not registered", args.clan)
        return
    for season in storage.seasons(args.clan):
        print(season)

async def copy(args: argparse.Namespace, backend: StorageBackend) -> None:
    content = await backend.load()
    # make sure we don't spread a broken blob
    Storage.from_json(content)
    await FileStorage(args.to_file).write(content)
    logger.info("Copied %d bytes to %s", len(content), args.to_file)

COMMANDS = {
    "register": register,
    "summary": summary,
    "seasons": seasons,
    "copy": copy,
}

def main(argv=None) -> int:
    """main"""
    args = get_arguments(argv)
    setup_logging(args.log_level, args.discord_logging_url)
    logger.debug(args)
    try:
        backend = build_backend(args)
        asyncio.run(COMMANDS[args.command](args, backend))
    except (StorageError, ValueError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
