"""Tags identifying clans, wars and players"""
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from clanstats.utils.const import TAG_SIGIL


class Tag(str):
    """String that has to start with the tag sigil.

    The subclasses only exist so clan, war and player tags can't be mixed up
    in signatures. They validate and serialize the same way.
    """

    __slots__ = ()

    def __new__(cls, value: str):
        if not isinstance(value, str):
            raise TypeError(f"{cls.__name__} expects a string, got {type(value).__name__}")
        if not value.startswith(TAG_SIGIL):
            raise ValueError(f"{cls.__name__} has to start with {TAG_SIGIL!r}: {value!r}")
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any,
                                     handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )


class ClanTag(Tag):
    """Tag of a clan"""
    __slots__ = ()


class WarTag(Tag):
    """Tag of a single clan war league war"""
    __slots__ = ()


class PlayerTag(Tag):
    """Tag of a clan member"""
    __slots__ = ()
