"""Response bodies of the connections API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class FollowersResponse(BaseModel):
    followers: list[str] = Field(default_factory=list, description="Follower ids, oldest connection first")


class FollowingsResponse(BaseModel):
    followings: list[str] = Field(default_factory=list, description="Followed ids, oldest connection first")
