"""Display name lookup for manifest definitions"""
import logging
from typing import Any, Dict, Optional, Tuple, Union

from clan_rewards.services.bungie import BungieAPI

logger = logging.getLogger(__name__)

MILESTONE_DEFINITION = "DestinyMilestoneDefinition"


class DefinitionLookup:
    """Resolves reward hashes to display names, memoised for a single run"""

    def __init__(self, api: BungieAPI, log: Union[logging.Logger, logging.LoggerAdapter, None] = None):
        self.api = api
        self.log = log or logger
        self._definitions: Dict[Tuple[str, int], Dict[str, Any]] = {}

    def get(self, entity_type: str, definition_hash: int) -> Dict[str, Any]:
        key = (entity_type, definition_hash)
        if key not in self._definitions:
            self._definitions[key] = self.api.get_definition(entity_type, definition_hash)
        return self._definitions[key]

    def _reward_category(self, milestone_hash: int, category_hash: int) -> Optional[Dict[str, Any]]:
        milestone = self.get(MILESTONE_DEFINITION, milestone_hash)
        return (milestone.get('rewards') or {}).get(str(category_hash))

    def reward_category_name(self, milestone_hash: int, category_hash: int) -> str:
        """Display name of a reward category, or its hash when undefined"""
        category = self._reward_category(milestone_hash, category_hash)
        if category is None:
            self.log.warning(f"no definition for reward category {category_hash}")
            return str(category_hash)
        return category.get('displayProperties', {}).get('name', str(category_hash))

    def reward_entry_name(self, milestone_hash: int, category_hash: int, entry_hash: int) -> str:
        """Display name of a reward entry, or its hash when undefined"""
        category = self._reward_category(milestone_hash, category_hash) or {}
        entry = (category.get('rewardEntries') or {}).get(str(entry_hash))
        if entry is None:
            self.log.warning(f"no definition for reward entry {entry_hash}")
            return str(entry_hash)
        return entry.get('displayProperties', {}).get('name', str(entry_hash))
