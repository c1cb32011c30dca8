"""
Connections router — follow, unfollow and list.

Endpoints:
    GET    /connections/{user}                 Followers of user
    GET    /connections/{user}/followings      Accounts user follows
    POST   /connections/{user}/{follower}      follower starts following user
    DELETE /connections/{user}/{follower}      follower stops following user

Every listing is ordered by connection creation time, oldest first.  Reads
and POST answer 404 when the directory cannot confirm a referenced user;
DELETE never does.

Tags:
    api, connections, follow-graph

Doc-Types: API_REFERENCE
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path

from followgraph.api.deps import Connections
from followgraph.api.schemas.connections import FollowersResponse, FollowingsResponse

router = APIRouter(prefix="/connections")

UserId = Annotated[
    str,
    Path(min_length=1, description="User id as known to the user directory"),
]
FollowerId = Annotated[
    str,
    Path(min_length=1, description="Id of the following account"),
]


@router.get("/{user}", response_model=FollowersResponse)
def get_followers(user: UserId, svc: Connections) -> FollowersResponse:
    """List the followers of *user*."""
    return FollowersResponse(followers=svc.get_followers(user))


@router.get("/{user}/followings", response_model=FollowingsResponse)
def get_followings(user: UserId, svc: Connections) -> FollowingsResponse:
    """List the accounts *user* follows."""
    return FollowingsResponse(followings=svc.get_followings(user))


@router.post("/{user}/{follower}", response_model=FollowersResponse)
def add_connection(user: UserId, follower: FollowerId, svc: Connections) -> FollowersResponse:
    """Make *follower* follow *user*; repeating the call changes nothing."""
    return FollowersResponse(followers=svc.add_connection(user, follower))


@router.delete("/{user}/{follower}", response_model=FollowersResponse)
def delete_connection(user: UserId, follower: FollowerId, svc: Connections) -> FollowersResponse:
    """Remove the connection if present and return the remaining followers."""
    return FollowersResponse(followers=svc.delete_connection(user, follower))
