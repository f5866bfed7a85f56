"""Stats stored for a single clan in a single season"""
from typing import Iterator, Optional

from pydantic import AwareDatetime, BaseModel, Field, NonNegativeInt, field_validator

from clanstats.models.tags import PlayerTag


class WarAttack(BaseModel):
    """single attack of a member in a war"""
    destruction: NonNegativeInt
    stars: NonNegativeInt
    duration: NonNegativeInt


class MemberWarStats(BaseModel):
    """attacks a member made in one war"""
    attacks: list[WarAttack] = []

    @property
    def stars(self) -> int:
        return sum(attack.stars for attack in self.attacks)


class CwlWarStats(BaseModel):
    """one war of the clan war league"""
    members: dict[PlayerTag, MemberWarStats] = {}


class CwlStats(BaseModel):
    """all clan war league wars of a season"""
    wars: list[CwlWarStats] = []


class WarStats(BaseModel):
    """one regular clan war"""
    start_time: AwareDatetime
    members: dict[PlayerTag, MemberWarStats] = {}


class RaidMember(BaseModel):
    looted: NonNegativeInt


class RaidWeekendStats(BaseModel):
    """one raid weekend"""
    start_time: AwareDatetime
    members: dict[PlayerTag, RaidMember] = {}


class PlayerGamesStats(BaseModel):
    """clan games score of a member, as first and last seen in the season"""
    start_score: Optional[NonNegativeInt] = None
    end_score: NonNegativeInt

    @property
    def net_score(self) -> int:
        """score gained in the season, 0 when the starting score is unknown"""
        start = self.end_score if self.start_score is None else self.start_score
        return self.end_score - start


class PlayerSummary(BaseModel):
    """everything a member contributed in a season"""
    cwl_stars: int = 0
    war_stars: int = 0
    raid_loot: int = 0
    games_score: int = 0


def _by_start_time(entries: dict) -> dict:
    return dict(sorted(entries.items(), key=lambda item: item[0]))


class ClanStorage(BaseModel):
    """All the stats of a clan for one season.

    ``wars`` and ``raid_weekend`` are ordered by start time. Insert into them
    through :meth:`record_war` and :meth:`record_raid_weekend` only, writing
    to the dicts directly skips the sorting until the next validation.
    """
    cwl: CwlStats = Field(default_factory=CwlStats)
    wars: dict[AwareDatetime, WarStats] = {}
    games: dict[PlayerTag, PlayerGamesStats] = {}
    raid_weekend: dict[AwareDatetime, RaidWeekendStats] = {}
    player_names: dict[PlayerTag, str] = {}

    @field_validator("wars", "raid_weekend")
    @classmethod
    def sort_by_start_time(cls, entries: dict) -> dict:
        """keep wars and raids ordered by their start time"""
        return _by_start_time(entries)

    def record_war(self, war: WarStats) -> None:
        """add or replace the war starting at ``war.start_time``"""
        self.wars[war.start_time] = war
        self.wars = _by_start_time(self.wars)

    def record_raid_weekend(self, raid: RaidWeekendStats) -> None:
        """add or replace the raid weekend starting at ``raid.start_time``"""
        self.raid_weekend[raid.start_time] = raid
        self.raid_weekend = _by_start_time(self.raid_weekend)

    def record_cwl_war(self, war: CwlWarStats) -> None:
        self.cwl.wars.append(war)

    def record_games_score(self, tag: PlayerTag, score: int) -> None:
        """The first score seen in a season is kept as the starting score,
        every later one moves the end score."""
        stats = self.games.get(tag)
        if stats is None:
            self.games[tag] = PlayerGamesStats(start_score=score, end_score=score)
        else:
            stats.end_score = score

    def set_player_name(self, tag: PlayerTag, name: str) -> None:
        self.player_names[tag] = name

    def players_summary(self) -> Iterator[tuple[PlayerTag, PlayerSummary]]:
        """Summarize every member with a known name.

        Members that have stats but never got a name recorded are left out.
        The order of the results is not defined.
        """
        players = set(self.player_names.keys())

        for tag in players:
            cwl_stars = sum(war.members[tag].stars for war in self.cwl.wars
                            if tag in war.members)
            war_stars = sum(war.members[tag].stars for war in self.wars.values()
                            if tag in war.members)
            raid_loot = sum(raid.members[tag].looted for raid in self.raid_weekend.values()
                            if tag in raid.members)
            games = self.games.get(tag)
            games_score = games.net_score if games is not None else 0

            yield tag, PlayerSummary(cwl_stars=cwl_stars,
                                     war_stars=war_stars,
                                     raid_loot=raid_loot,
                                     games_score=games_score)
