"""Earliest clan completion selection"""
import logging
from functools import partial
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Set, Tuple, Union

from clan_rewards.activities import DEFAULT_PAGE_SIZE, collect_activities, is_clan_candidate
from clan_rewards.models.activity import (
    ActivityInstance, ActivityMode, Character, Completion, FireteamEntry, Member, RewardPeriod
)

logger = logging.getLogger(__name__)

Log = Union[logging.Logger, logging.LoggerAdapter]


class StatsSource(Protocol):
    """The lookups the selector needs; implemented by BungieAPI"""

    def get_characters(self, member: Member) -> List[Character]:
        ...

    def get_activity_page(self, character: Character, mode: ActivityMode,
                          page: int, count: int) -> List[ActivityInstance]:
        ...

    def get_fireteam(self, instance_id: int) -> List[FireteamEntry]:
        ...


def resolve_fireteam(source: StatsSource, instance_id: int, roster_ids: Set[int]) -> List[Member]:
    """Clan members who completed the instance alongside the fireteam"""
    members: Dict[int, Member] = {}
    for entry in source.get_fireteam(instance_id):
        if not entry.completed:
            continue
        if entry.member.membership_id in roster_ids:
            members.setdefault(entry.member.membership_id, entry.member)
    return list(members.values())


def meets_quorum(mode: ActivityMode, members: Sequence[Member]) -> bool:
    """True when enough clan members were present to count as a clan clear"""
    return len(members) >= mode.quorum


class EarliestCompletionSelector:
    """
    Finds, per activity mode, the earliest qualifying clan completion in a window.

    Every member's every character is scanned. A candidate replaces the current
    best only when it ends strictly earlier, so on equal end times the first
    completion scanned is kept.
    """

    def __init__(self, source: StatsSource, roster: Sequence[Member], window: RewardPeriod,
                 page_size: int = DEFAULT_PAGE_SIZE, log: Optional[Log] = None):
        self.source = source
        self.roster = list(roster)
        self.roster_ids = {member.membership_id for member in self.roster}
        self.window = window
        self.page_size = page_size
        self.log = log or logger
        self._evaluated: Dict[Tuple[int, ActivityMode], Optional[Completion]] = {}

    def _evaluate(self, activity: ActivityInstance) -> Optional[Completion]:
        """Build the completion for an instance, or None if the fireteam lacks quorum"""
        key = (activity.instance_id, activity.mode)
        if key in self._evaluated:
            return self._evaluated[key]

        members = resolve_fireteam(self.source, activity.instance_id, self.roster_ids)
        for member in members:
            self.log.debug(
                f"clan member {member.membership_id} ({member.display_name!r}) was a member of the fireteam"
            )

        completion = None
        if meets_quorum(activity.mode, members):
            completion = Completion(
                end=activity.end,
                instance_id=activity.instance_id,
                fireteam_members=tuple(members)
            )
        else:
            self.log.debug(
                f"only {len(members)} clan members in fireteam for instance {activity.instance_id}, "
                f"{activity.mode.quorum} needed"
            )
        self._evaluated[key] = completion
        return completion

    def scan_member(self, mode: ActivityMode, characters: Iterable[Character],
                    best: Optional[Completion] = None) -> Optional[Completion]:
        """Fold one member's characters' completions into the running best"""
        for character in characters:
            fetch_page = partial(self.source.get_activity_page, character, mode, count=self.page_size)
            activities = collect_activities(fetch_page, self.window, self.page_size)
            for activity in activities:
                if not is_clan_candidate(activity):
                    continue
                if best is not None and not activity.end < best.end:
                    continue
                candidate = self._evaluate(activity)
                if candidate is None:
                    continue
                best = candidate
        return best

    def select(self, mode: ActivityMode) -> Optional[Completion]:
        """Earliest qualifying completion of one mode across the whole roster"""
        best = None
        for member in self.roster:
            best = self.scan_member(mode, self.source.get_characters(member), best)
        return best

    def select_all(self, modes: Iterable[ActivityMode] = tuple(ActivityMode)) -> Dict[ActivityMode, Optional[Completion]]:
        """Earliest qualifying completion of every mode, fetching characters once per member"""
        modes = list(modes)
        best: Dict[ActivityMode, Optional[Completion]] = {mode: None for mode in modes}
        for member in self.roster:
            characters = self.source.get_characters(member)
            for mode in modes:
                best[mode] = self.scan_member(mode, characters, best[mode])
        return best
