"""
Post request schemas.
"""

from pydantic import Field

from webapi.schemas.common import RequestSchema


class PostRequest(RequestSchema):
    """Create or update a post. Title and content are stored as submitted."""
    title: str = Field(..., min_length=1, description="Post title")
    content: str = Field(..., min_length=1, description="Post body")
