from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from clanstats.models import (ClanStorage, CwlWarStats, MemberWarStats, PlayerTag,
                              RaidMember, RaidWeekendStats, WarAttack, WarStats)


def _attack(stars: int, destruction: int = 100, duration: int = 90) -> WarAttack:
    return WarAttack(destruction=destruction, stars=stars, duration=duration)


@pytest.fixture
def clan_storage() -> ClanStorage:
    """Season with one member in every kind of stat and one unnamed member."""

    named = PlayerTag("#P1")
    unnamed = PlayerTag("#P2")
    storage = ClanStorage()
    storage.set_player_name(named, "Alice")

    storage.record_cwl_war(CwlWarStats(members={
        named: MemberWarStats(attacks=[_attack(3)]),
        unnamed: MemberWarStats(attacks=[_attack(2)]),
    }))
    storage.record_cwl_war(CwlWarStats(members={named: MemberWarStats(attacks=[_attack(3)])}))

    storage.record_war(WarStats(
        start_time=datetime(2024, 3, 10, 12, tzinfo=timezone.utc),
        members={named: MemberWarStats(attacks=[_attack(1, 50), _attack(3)])},
    ))
    storage.record_raid_weekend(RaidWeekendStats(
        start_time=datetime(2024, 3, 8, 7, tzinfo=timezone.utc),
        members={named: RaidMember(looted=1000), unnamed: RaidMember(looted=500)},
    ))

    storage.record_games_score(named, 50)
    storage.record_games_score(named, 120)
    return storage
