"""Bungie.net API integration service"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union

import requests

from clan_rewards.exceptions import AmbiguousIdentityError, BungieAPIError
from clan_rewards.models.activity import ActivityInstance, ActivityMode, Character, FireteamEntry, Member
from clan_rewards.models.rewards import RewardState

logger = logging.getLogger(__name__)

BUNGIE_SUCCESS = 1
PERIOD_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
CHARACTERS_COMPONENT = 200
CLAN_GROUP_TYPE = 1


def parse_period(value: str) -> datetime:
    """Parse a Bungie timestamp into an aware UTC datetime"""
    return datetime.strptime(value, PERIOD_FORMAT).replace(tzinfo=timezone.utc)


def _basic_value(values: Dict[str, Any], name: str) -> Optional[float]:
    stat = values.get(name)
    if stat is None:
        return None
    return stat.get('basic', {}).get('value')


def _member_from_user_info(info: Dict[str, Any]) -> Member:
    return Member(
        membership_id=int(info['membershipId']),
        membership_type=int(info['membershipType']),
        display_name=info.get('bungieGlobalDisplayName') or info.get('displayName', '')
    )


class BungieAPI:
    """Handles all Bungie.net API interactions with consistent formatting"""

    def __init__(self, api_key: str, base_url: str = "https://www.bungie.net/Platform",
                 stats_url: str = "https://stats.bungie.net/Platform",
                 log: Union[logging.Logger, logging.LoggerAdapter, None] = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.stats_url = stats_url.rstrip('/')
        self.session = requests.Session()
        self.log = log or logger

    def _make_request(self, endpoint: str, method: str = 'GET', params: Optional[Dict[str, Any]] = None,
                      payload: Optional[Dict[str, Any]] = None, base_url: Optional[str] = None) -> Any:
        """Make request to the Bungie.net API and unwrap the response envelope"""
        headers = {
            'X-API-Key': self.api_key,
            'Accept': 'application/json'
        }
        url = f"{base_url or self.base_url}/{endpoint.lstrip('/')}"

        try:
            response = self.session.request(method, url, headers=headers, params=params, json=payload)
            response.raise_for_status()
            body = response.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise BungieAPIError(f"Request to {endpoint} failed: {e}", status_code=status) from e
        except (requests.RequestException, ValueError) as e:
            raise BungieAPIError(f"Request to {endpoint} failed: {e}") from e

        error_code = body.get('ErrorCode', BUNGIE_SUCCESS)
        if error_code != BUNGIE_SUCCESS:
            raise BungieAPIError(
                f"Bungie API error for {endpoint}: {body.get('Message', 'unknown error')}",
                status_code=response.status_code,
                error_code=error_code,
                error_status=body.get('ErrorStatus')
            )
        return body.get('Response')

    def search_player(self, username: str) -> Member:
        """Find the single Destiny account matching a display name or Bungie name"""
        self.log.info(f"getting destiny user {username!r}")
        display_name, _, code = username.rpartition('#')
        if display_name and code.isdigit():
            results = self._make_request(
                'Destiny2/SearchDestinyPlayerByBungieName/-1/',
                method='POST',
                payload={'displayName': display_name, 'displayNameCode': int(code)}
            )
        else:
            results = self._make_request(
                f"Destiny2/SearchDestinyPlayer/-1/{requests.utils.quote(username, safe='')}/"
            )

        results = results or []
        if len(results) != 1:
            raise AmbiguousIdentityError(f"found {len(results)} destiny users named {username!r}")
        return _member_from_user_info(results[0])

    def get_clan(self, member: Member) -> Tuple[int, str]:
        """Get the clan group (id, name) a member belongs to"""
        self.log.info(f"getting clan for destiny user {member.display_name!r}")
        response = self._make_request(
            f'GroupV2/User/{member.membership_type}/{member.membership_id}/0/{CLAN_GROUP_TYPE}/'
        )
        results = (response or {}).get('results', [])
        if len(results) != 1:
            raise AmbiguousIdentityError(
                f"found {len(results)} clans for destiny user {member.display_name!r}"
            )
        group = results[0]['group']
        return int(group['groupId']), group.get('name', '')

    def get_clan_members(self, group_id: int) -> List[Member]:
        """Get every clan member, following pagination while more pages exist"""
        members = []
        current_page = 1
        while True:
            self.log.info(f"getting clan members (page {current_page})")
            response = self._make_request(
                f'GroupV2/{group_id}/Members/',
                params={'currentpage': current_page}
            ) or {}
            for result in response.get('results', []):
                members.append(_member_from_user_info(result['destinyUserInfo']))
            if not response.get('hasMore'):
                break
            current_page += 1

        self.log.info(f"found {len(members)} members")
        return members

    def get_reward_state(self, group_id: int) -> RewardState:
        """Get the clan's weekly reward milestone"""
        self.log.info(f"getting clan reward status for clan {group_id}")
        response = self._make_request(f'Destiny2/Clan/{group_id}/WeeklyRewardState/')
        return RewardState.model_validate(response)

    def get_characters(self, member: Member) -> List[Character]:
        """Get the characters of a member; an empty profile yields no characters"""
        self.log.info(
            f"getting characters for destiny user {member.membership_id} ({member.display_name!r})"
        )
        response = self._make_request(
            f'Destiny2/{member.membership_type}/Profile/{member.membership_id}/',
            params={'components': CHARACTERS_COMPONENT}
        )
        data = ((response or {}).get('characters') or {}).get('data') or {}
        if not data:
            self.log.info(f"no characters for user {member.membership_id} ({member.display_name!r})")
        return [Character(character_id=int(character_id), member=member) for character_id in data]

    def get_activity_page(self, character: Character, mode: ActivityMode,
                          page: int, count: int) -> List[ActivityInstance]:
        """Get one page of a character's activity history, newest first"""
        member = character.member
        self.log.info(
            f"getting {mode.label} activities for character {character.character_id} of destiny user "
            f"{member.membership_id} ({member.display_name!r}) page {page}"
        )
        response = self._make_request(
            f'Destiny2/{member.membership_type}/Account/{member.membership_id}'
            f'/Character/{character.character_id}/Stats/Activities/',
            params={'mode': mode.code, 'count': count, 'page': page}
        )
        activities = (response or {}).get('activities', [])
        return [self._format_activity(activity, mode) for activity in activities]

    def get_fireteam(self, instance_id: int) -> List[FireteamEntry]:
        """Get every participant of an activity instance from its post-game carnage report"""
        self.log.info(f"getting fireteam for instance {instance_id}")
        response = self._make_request(
            f'Destiny2/Stats/PostGameCarnageReport/{instance_id}/',
            base_url=self.stats_url
        ) or {}
        entries = []
        for entry in response.get('entries', []):
            completed = _basic_value(entry.get('values', {}), 'completed')
            entries.append(FireteamEntry(
                member=_member_from_user_info(entry['player']['destinyUserInfo']),
                completed=bool(completed)
            ))
        return entries

    def get_definition(self, entity_type: str, definition_hash: int) -> Dict[str, Any]:
        """Get a single manifest definition"""
        self.log.info(f"getting {entity_type} {definition_hash}")
        return self._make_request(f'Destiny2/Manifest/{entity_type}/{definition_hash}/') or {}

    def _format_activity(self, activity: Dict[str, Any], mode: ActivityMode) -> ActivityInstance:
        """Format a single activity history record into our domain model"""
        values = activity.get('values', {})
        standing = _basic_value(values, 'standing')
        completion_reason = _basic_value(values, 'completionReason')

        return ActivityInstance(
            instance_id=int(activity['activityDetails']['instanceId']),
            mode=mode,
            start=parse_period(activity['period']),
            duration_seconds=int(_basic_value(values, 'activityDurationSeconds') or 0),
            completed=bool(_basic_value(values, 'completed')),
            standing=int(standing) if standing is not None else None,
            completion_reason=int(completion_reason) if completion_reason is not None else None
        )
