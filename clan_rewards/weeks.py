"""Weekly reward window stepping"""
from datetime import timedelta
from typing import Iterator

from clan_rewards.models.activity import RewardPeriod

WEEK = timedelta(days=7)


def previous_week(period: RewardPeriod) -> RewardPeriod:
    # timedelta arithmetic on dates and aware datetimes is wall-clock, so a
    # DST change inside the week does not shift the reset time.
    return RewardPeriod(start=period.start - WEEK, end=period.end - WEEK)


def reward_windows(period: RewardPeriod, count: int) -> Iterator[RewardPeriod]:
    """Yield `count` windows starting with `period`, each a week before the last"""
    for _ in range(count):
        yield period
        period = previous_week(period)
