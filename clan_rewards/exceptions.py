"""Exceptions raised while building a clan rewards report"""
from typing import Optional


class ClanRewardsError(Exception):
    """Base exception for clan rewards errors"""
    pass


class AmbiguousIdentityError(ClanRewardsError):
    """A player name or clan lookup did not resolve to exactly one match"""
    pass


class BungieAPIError(ClanRewardsError):
    """Transport or envelope error returned by the Bungie.net API"""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 error_code: Optional[int] = None, error_status: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.error_status = error_status


class UnclassifiableActivityError(ClanRewardsError):
    """An activity could not be mapped onto a known mode or victory signal"""
    pass
