"""API request/response schemas."""

from followgraph.api.schemas.common import ErrorDetail, ProblemDetail
from followgraph.api.schemas.connections import FollowersResponse, FollowingsResponse

__all__ = ["ErrorDetail", "FollowersResponse", "FollowingsResponse", "ProblemDetail"]
