"""storage objects"""
from clanstats.models.tags import Tag, ClanTag, WarTag, PlayerTag
from clanstats.models.season import Season
from clanstats.models.clan_storage import (ClanStorage, CwlStats, CwlWarStats, MemberWarStats,
                                           PlayerGamesStats, PlayerSummary, RaidMember,
                                           RaidWeekendStats, WarAttack, WarStats)
from clanstats.models.storage import Storage

__all__ = [
    "Tag", "ClanTag", "WarTag", "PlayerTag", "Season",
    "ClanStorage", "CwlStats", "CwlWarStats", "MemberWarStats", "PlayerGamesStats",
    "PlayerSummary", "RaidMember", "RaidWeekendStats", "WarAttack", "WarStats",
    "Storage",
]
