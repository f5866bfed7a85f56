"""Season a set of stats belongs to"""
import re
from datetime import datetime, timezone
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

SEASON_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")
MAX_YEAR = 9999


class Season:
    """A calendar month, written as ``YYYY-MM``"""

    __slots__ = ("_year", "_month")

    def __init__(self, year: int, month: int):
        if isinstance(year, bool) or not isinstance(year, int) or not 0 <= year <= MAX_YEAR:
            raise ValueError(f"Invalid season year: {year!r}")
        if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
            raise ValueError(f"Invalid season month: {month!r}")
        self._year = year
        self._month = month

    @property
    def year(self) -> int:
        return self._year

    @property
    def month(self) -> int:
        return self._month

    @classmethod
    def parse(cls, raw: str) -> "Season":
        """parse a ``YYYY-MM`` string"""
        match = SEASON_PATTERN.match(raw) if isinstance(raw, str) else None
        if match is None:
            raise ValueError(f"Season has to look like YYYY-MM: {raw!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def current(cls) -> "Season":
        return cls.from_datetime(datetime.now(timezone.utc))

    @classmethod
    def from_datetime(cls, moment: datetime) -> "Season":
        return cls(moment.year, moment.month)

    def previous(self) -> "Season":
        if self._month == 1:
            return Season(self._year - 1, 12)
        return Season(self._year, self._month - 1)

    def next(self) -> "Season":
        if self._month == 12:
            return Season(self._year + 1, 1)
        return Season(self._year, self._month + 1)

    def __str__(self) -> str:
        return f"{self._year:04d}-{self._month:02d}"

    def __repr__(self) -> str:
        return f"Season(year={self._year}, month={self._month})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Season):
            return NotImplemented
        return (self._year, self._month) == (other.year, other.month)

    def __hash__(self) -> int:
        return hash((self._year, self._month))

    def __lt__(self, other) -> bool:
        if not isinstance(other, Season):
            return NotImplemented
        return (self._year, self._month) < (other.year, other.month)

    @classmethod
    def _validate(cls, value: Any) -> "Season":
        if isinstance(value, Season):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        raise ValueError(f"Expected a season or a YYYY-MM string, got {value!r}")

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any,
                                     handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str, when_used="json"),
        )
