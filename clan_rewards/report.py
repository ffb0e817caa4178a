"""Main clan rewards report logic"""
import logging
from typing import List, Optional

from clan_rewards.config import Settings
from clan_rewards.formatting import RewardSection, format_report
from clan_rewards.models.activity import Member
from clan_rewards.models.rewards import RewardCategory
from clan_rewards.selection import EarliestCompletionSelector
from clan_rewards.services.bungie import BungieAPI
from clan_rewards.services.manifest import DefinitionLookup
from clan_rewards.weeks import reward_windows

logger = logging.getLogger(__name__)


class RunLogAdapter(logging.LoggerAdapter):
    """Prefixes every message with the run it belongs to"""

    def process(self, msg, kwargs):
        return f"[{self.extra['run']}] {msg}", kwargs


class ClanRewardsReport:
    """Builds the weekly clan rewards report for a player's clan"""

    def __init__(self, settings: Settings, api: Optional[BungieAPI] = None,
                 log: Optional[logging.LoggerAdapter] = None):
        """Initialize report generator with settings"""
        self.settings = settings
        self.log = log or RunLogAdapter(logger, {'run': settings.BUNGIE_USERNAME or 'clan-rewards'})
        self.api = api or BungieAPI(
            settings.BUNGIE_API_KEY,
            base_url=settings.BUNGIE_BASE_URL,
            stats_url=settings.BUNGIE_STATS_URL,
            log=self.log
        )
        self.definitions = DefinitionLookup(self.api, log=self.log)

    def get_roster(self, group_id: int) -> List[Member]:
        """Clan members ordered by membership ID; the order decides ties"""
        members = self.api.get_clan_members(group_id)
        return sorted(members, key=lambda member: member.membership_id)

    def _build_section(self, milestone_hash: int, category: RewardCategory, window,
                       roster: List[Member]) -> RewardSection:
        category_hash = category.reward_category_hash
        entries = [
            (self.definitions.reward_entry_name(milestone_hash, category_hash, entry.reward_entry_hash), entry.earned)
            for entry in category.entries
        ]

        self.log.info(f"finding earliest clan completions between {window.start} and {window.end}")
        selector = EarliestCompletionSelector(
            self.api, roster, window,
            page_size=self.settings.ACTIVITY_PAGE_SIZE,
            log=self.log
        )
        return RewardSection(
            category_name=self.definitions.reward_category_name(milestone_hash, category_hash),
            window=window,
            entries=entries,
            completions=selector.select_all()
        )

    def generate(self, username: str) -> List[RewardSection]:
        """Resolve the player's clan and evaluate each reward category against successive weeks"""
        member = self.api.search_player(username)
        group_id, clan_name = self.api.get_clan(member)
        self.log.info(f"reporting on clan {group_id} ({clan_name!r})")

        state = self.api.get_reward_state(group_id)
        roster = self.get_roster(group_id)
        milestone_hash = state.milestone_hash or self.settings.CLAN_MILESTONE_HASH

        windows = reward_windows(state.period, len(state.rewards))
        return [
            self._build_section(milestone_hash, category, window, roster)
            for category, window in zip(state.rewards, windows)
        ]

    def render(self, username: str) -> str:
        return format_report(self.generate(username))
