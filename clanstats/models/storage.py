"""Top level storage holding the stats of every registered clan"""
import logging
from typing import Optional

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from clanstats.backends.base import StorageBackend
from clanstats.models.clan_storage import ClanStorage
from clanstats.models.season import Season
from clanstats.models.tags import ClanTag
from clanstats.utils.const import LOGGER_NAME
from clanstats.utils.enums import ErrorKind
from clanstats.utils.errors import StorageError

logger = logging.getLogger(LOGGER_NAME)


class Storage(BaseModel):
    """Stats of all clans, grouped by season.

    The whole object is written and loaded as one JSON document.
    """
    clans: dict[ClanTag, dict[Season, ClanStorage]] = {}

    @classmethod
    def empty(cls) -> "Storage":
        return cls()

    def register_clan(self, tag: ClanTag) -> None:
        """start tracking a clan, does nothing if it is already tracked"""
        if tag in self.clans:
            return
        self.clans[ClanTag(tag)] = {}

    def registered_clans(self) -> list[ClanTag]:
        return list(self.clans.keys())

    def seasons(self, tag: ClanTag) -> list[Season]:
        """seasons stored for a clan, oldest first"""
        return sorted(self.clans.get(tag, {}).keys())

    def get_or_create(self, tag: ClanTag, season: Season) -> Optional[ClanStorage]:
        """Stats of a clan for the season, created empty when missing.

        Returns None when the clan was never registered.
        """
        seasons = self.clans.get(tag)
        if seasons is None:
            return None
        if season not in seasons:
            seasons[season] = ClanStorage()
        return seasons[season]

    def get(self, tag: ClanTag, season: Season) -> Optional[ClanStorage]:
        """Stats of a clan for the season without creating anything"""
        return self.clans.get(tag, {}).get(season)

    def to_json(self) -> bytes:
        try:
            return self.model_dump_json().encode("utf-8")
        except PydanticSerializationError as se:
            raise StorageError(ErrorKind.VALIDATION_FAILED, str(se)) from se

    @classmethod
    def from_json(cls, content: bytes) -> "Storage":
        try:
            return cls.model_validate_json(content)
        except ValidationError as ve:
            raise StorageError(ErrorKind.MALFORMED_CONTENT,
                               f"{ve.error_count()} validation errors") from ve

    @classmethod
    async def load(cls, backend: StorageBackend) -> "Storage":
        """Load the storage from a backend. Raises StorageError"""
        content = await backend.load()
        try:
            return cls.from_json(content)
        except StorageError as se:
            logger.error("Loading storage from %s failed: %s", backend, se)
            raise

    async def save(self, backend: StorageBackend) -> None:
        """Serialize the storage and write it to a backend. Raises StorageError"""
        try:
            content = self.to_json()
        except StorageError as se:
            logger.error("Serializing storage failed: %s", se)
            raise

        try:
            await backend.write(content)
        except StorageError as se:
            logger.error("Storing to %s failed: %s", backend, se)
            raise
