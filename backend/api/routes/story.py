"""
Story generation endpoint.

Requires a full subscription or the admin role.
"""

from fastapi import APIRouter, Depends

from modules.accounts.models import Account
from modules.stories.models import StoryRequest, StoryResponse
from modules.stories.service import StoryService

from ..dependencies import get_story_service
from ..models.errors import AUTH_ERROR_RESPONSES
from ..middleware.auth import require_full_access

router = APIRouter()


@router.post(
    "/story/generate",
    response_model=StoryResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    responses=AUTH_ERROR_RESPONSES,
)
async def generate_story(
    body: StoryRequest,
    account: Account = Depends(require_full_access),
    stories: StoryService = Depends(get_story_service),
) -> StoryResponse:
    """
    Write a story from the chosen adjective, subject and length.

    Custom adjectives/subjects that resemble a predefined option are
    rejected with 400.
    """
    return await stories.generate(account, body)
