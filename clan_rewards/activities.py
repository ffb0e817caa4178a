"""Activity window filtering and victory classification"""
import logging
from typing import Callable, Iterable, List

from clan_rewards.exceptions import UnclassifiableActivityError
from clan_rewards.models.activity import VICTORY_CODE, ActivityInstance, RewardPeriod

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


def in_window(activity: ActivityInstance, window: RewardPeriod) -> bool:
    """True when the activity started and ended inside the window"""
    return window.contains(activity.start, activity.end)


def filter_window(activities: Iterable[ActivityInstance], window: RewardPeriod) -> List[ActivityInstance]:
    """Keep the activities whose whole time span lies inside the window"""
    return [activity for activity in activities if in_window(activity, window)]


def collect_activities(fetch_page: Callable[[int], List[ActivityInstance]], window: RewardPeriod,
                       page_size: int = DEFAULT_PAGE_SIZE) -> List[ActivityInstance]:
    """
    Walk a newest-first paginated history and gather activities inside the window.

    Pagination stops once a page contributes nothing or comes back short.

    Args:
        fetch_page: Returns the records of the given zero-based page
        window: Window the activities must lie in
        page_size: Number of records requested per page
    """
    activities = []
    page = 0
    while True:
        records = fetch_page(page)
        retained = filter_window(records, window)
        if not retained:
            break
        activities.extend(retained)
        if len(records) < page_size:
            break
        page += 1
    return activities


def is_victory(activity: ActivityInstance) -> bool:
    """
    Decide whether a completed activity was won.

    The mode's victory signals are consulted in order and the first one present
    decides. An activity carrying none of them cannot be classified.
    """
    for signal in activity.mode.victory_signals:
        value = activity.signal(signal)
        if value is not None:
            return value == VICTORY_CODE
    raise UnclassifiableActivityError(
        f"unknown victory state for activity {activity.instance_id}"
    )


def is_clan_candidate(activity: ActivityInstance) -> bool:
    """Completed activities that were won; the rest are never fireteam-checked"""
    if not activity.completed:
        return False
    return is_victory(activity)
