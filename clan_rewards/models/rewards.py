"""Weekly clan reward state as returned by the Bungie.net API"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from clan_rewards.models.activity import RewardPeriod


class RewardEntry(BaseModel):
    """A single reward within a category and whether the clan earned it"""
    model_config = ConfigDict(populate_by_name=True)

    reward_entry_hash: int = Field(..., alias="rewardEntryHash")
    earned: bool = False
    redeemed: bool = False


class RewardCategory(BaseModel):
    """A group of reward entries, e.g. one per activity type"""
    model_config = ConfigDict(populate_by_name=True)

    reward_category_hash: int = Field(..., alias="rewardCategoryHash")
    entries: List[RewardEntry] = []


class RewardState(BaseModel):
    """
    Clan weekly reward milestone.

    Attributes:
        milestone_hash: Definition hash used to resolve display names
        start_date: Start of the current reward period
        end_date: End of the current reward period
        rewards: Reward categories with their earned flags
    """
    model_config = ConfigDict(populate_by_name=True)

    milestone_hash: Optional[int] = Field(None, alias="milestoneHash")
    start_date: datetime = Field(..., alias="startDate")
    end_date: datetime = Field(..., alias="endDate")
    rewards: List[RewardCategory] = []

    @property
    def period(self) -> RewardPeriod:
        return RewardPeriod(start=self.start_date, end=self.end_date)
