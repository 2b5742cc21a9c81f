from typing import List

from pydantic import ConfigDict

from self_olympics.schemas.registration import CamelModel


class LeaderboardEntry(CamelModel):
    country_code: str
    country_name: str
    count: int

    model_config = ConfigDict(from_attributes=True)


class LeaderboardResponse(CamelModel):
    success: bool = True
    leaderboard: List[LeaderboardEntry]
    total: int
