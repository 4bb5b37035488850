"""
Story generator service.

Validates custom inputs against the predefined options and writes a story
from a local template. Model-backed generation is not wired in; ``source``
is always ``local``.
"""

import logging
from typing import Iterable

from modules.accounts.models import Account

from .exceptions import InputTooSimilarError
from .models import (
    KNOWN_ADJECTIVES,
    KNOWN_SUBJECTS,
    CustomAdditions,
    StoryRequest,
    StoryResponse,
)

logger = logging.getLogger(__name__)


def is_distinct(value: str, options: Iterable[str]) -> bool:
    """
    Whether a custom value is different enough from every option.

    Equal, substring of each other, or sharing a stem (both longer than three
    characters and one starts with the other minus its last letter) counts
    as too similar.
    """
    candidate = value.lower()
    for option in options:
        known = option.lower()
        if candidate == known or candidate in known or known in candidate:
            return False
        if len(candidate) > 3 and len(known) > 3 and (
            candidate.startswith(known[:-1]) or known.startswith(candidate[:-1])
        ):
            return False
    return True


class StoryService:
    """Local story generation for full-access accounts."""

    def check_custom_inputs(self, request: StoryRequest) -> CustomAdditions:
        """
        Raises:
            InputTooSimilarError: A custom value collides with an option
        """
        additions = CustomAdditions()

        if request.adjective.lower() not in KNOWN_ADJECTIVES:
            if not is_distinct(request.adjective, KNOWN_ADJECTIVES):
                raise InputTooSimilarError("adjective", request.adjective)
            additions.adjective = request.adjective

        if request.subject.lower() not in KNOWN_SUBJECTS:
            if not is_distinct(request.subject, KNOWN_SUBJECTS):
                raise InputTooSimilarError("subject", request.subject)
            additions.subject = request.subject

        return additions

    async def generate(self, account: Account, request: StoryRequest) -> StoryResponse:
        additions = self.check_custom_inputs(request)
        logger.info(
            f"Story generation for {account.username} ({account.role.value}): "
            f"{request.adjective}/{request.subject}/{request.word_count}"
        )

        story = (
            f"Once upon a time, there was a {request.adjective} story about "
            f"{request.subject}. It was exactly {request.word_count} words long and "
            f"filled with wonder and imagination. The end."
        )
        has_additions = additions.adjective is not None or additions.subject is not None
        return StoryResponse(
            story=story,
            custom_added=additions if has_additions else None,
        )
