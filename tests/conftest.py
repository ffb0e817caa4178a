from datetime import datetime, timedelta, timezone

import pytest

from clan_rewards.models.activity import (
    ActivityInstance, ActivityMode, Character, FireteamEntry, Member, RewardPeriod
)

WEEK_START = datetime(2024, 1, 9, 17, 0, 0, tzinfo=timezone.utc)
WEEK_END = WEEK_START + timedelta(days=7)


def make_member(membership_id, name=None):
    return Member(membership_id=membership_id, membership_type=3, display_name=name or f"member{membership_id}")


def make_activity(instance_id, start, minutes=30, mode=ActivityMode.RAID, completed=True,
                  standing=0, completion_reason=None):
    return ActivityInstance(
        instance_id=instance_id,
        mode=mode,
        start=start,
        duration_seconds=minutes * 60,
        completed=completed,
        standing=standing,
        completion_reason=completion_reason
    )


def fireteam(*members, completed=True):
    return [FireteamEntry(member=m, completed=completed) for m in members]


class StubSource:
    """In-memory stand-in for the Bungie.net lookups used by the selector"""

    def __init__(self):
        self.characters = {}
        self.pages = {}
        self.fireteams = {}
        self.page_calls = []
        self.fireteam_calls = []

    def add_character(self, member, character_id):
        character = Character(character_id=character_id, member=member)
        self.characters.setdefault(member.membership_id, []).append(character)
        return character

    def add_pages(self, character, mode, *pages):
        self.pages[(character.character_id, mode)] = list(pages)

    def add_fireteam(self, instance_id, entries):
        self.fireteams[instance_id] = list(entries)

    def get_characters(self, member):
        return list(self.characters.get(member.membership_id, []))

    def get_activity_page(self, character, mode, page, count):
        self.page_calls.append((character.character_id, mode, page, count))
        pages = self.pages.get((character.character_id, mode), [])
        return pages[page] if page < len(pages) else []

    def get_fireteam(self, instance_id):
        self.fireteam_calls.append(instance_id)
        return self.fireteams.get(instance_id, [])


@pytest.fixture
def window():
    return RewardPeriod(start=WEEK_START, end=WEEK_END)


@pytest.fixture
def source():
    return StubSource()


@pytest.fixture
def roster():
    return [
        make_member(1, "alpha"),
        make_member(2, "Bravo"),
        make_member(3, "charlie"),
        make_member(4, "Delta"),
    ]
