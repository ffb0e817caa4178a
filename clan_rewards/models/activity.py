"""Domain models for clan members, activities and completions"""
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional, Tuple, Union

VICTORY_CODE = 0


class ActivityMode(Enum):
    """
    Activity categories that count towards weekly clan rewards.

    Each member carries its API mode code, report label, the minimum number of
    clan members required in the fireteam, and the order in which victory
    signals are consulted.
    """
    RAID = (4, "Raid", 3, ("standing", "completionReason"))
    NIGHTFALL = (16, "Nightfall", 2, ("standing", "completionReason"))
    TRIALS = (39, "Trials", 2, ("standing", "completionReason"))
    CRUCIBLE = (5, "Crucible", 2, ("standing", "completionReason"))

    def __init__(self, code: int, label: str, quorum: int, victory_signals: Tuple[str, ...]):
        self.code = code
        self.label = label
        self.quorum = quorum
        self.victory_signals = victory_signals


@dataclass(frozen=True)
class Member:
    """A Destiny account that belongs to the clan roster"""
    membership_id: int
    membership_type: int
    display_name: str


@dataclass(frozen=True)
class Character:
    """A character owned by a member; scopes activity history queries"""
    character_id: int
    member: Member


@dataclass(frozen=True)
class ActivityInstance:
    """One completed or attempted play session from a character's history"""
    instance_id: int
    mode: ActivityMode
    start: datetime
    duration_seconds: int
    completed: bool
    standing: Optional[int] = None
    completion_reason: Optional[int] = None

    @property
    def end(self) -> datetime:
        return self.start + timedelta(seconds=self.duration_seconds)

    def signal(self, name: str) -> Optional[int]:
        """Return the value of a victory signal, or None if the record lacks it"""
        if name == "standing":
            return self.standing
        if name == "completionReason":
            return self.completion_reason
        return None


@dataclass(frozen=True)
class FireteamEntry:
    """A participant listed in a post-game carnage report"""
    member: Member
    completed: bool


@dataclass(frozen=True)
class Completion:
    """The qualifying clan completion of an activity instance"""
    end: datetime
    instance_id: int
    fireteam_members: Tuple[Member, ...] = field(default_factory=tuple)

    def fireteam_as_string(self) -> str:
        """Comma-joined display names in alphabetical order; case only breaks ties"""
        names = sorted((m.display_name for m in self.fireteam_members), key=lambda n: (n.casefold(), n))
        return ",".join(names)


DateLike = Union[date, datetime]


@dataclass(frozen=True)
class RewardPeriod:
    """A weekly reward evaluation window"""
    start: DateLike
    end: DateLike

    def contains(self, start: DateLike, end: DateLike) -> bool:
        """True when [start, end] lies fully inside the window, edges included"""
        return self.start <= start and end <= self.end
