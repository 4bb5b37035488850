"""Story generator models."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


KNOWN_ADJECTIVES = ("funny", "sweet", "scary", "bedtime")
SCARY_SUBJECTS = ("ghost", "monster", "vampire", "werewolf")
OTHER_SUBJECTS = (
    "clown", "banana", "robot", "penguin", "puppy", "kitten",
    "butterfly", "rainbow", "moon", "star", "dream", "pillow",
)
KNOWN_SUBJECTS = SCARY_SUBJECTS + OTHER_SUBJECTS


class StoryRequest(BaseModel):
    """Story parameters chosen in the generator form."""

    model_config = ConfigDict(populate_by_name=True)

    adjective: str = Field(..., min_length=1)
    word_count: int = Field(..., alias="wordCount", gt=0, le=2000)
    subject: str = Field(..., min_length=1)


class CustomAdditions(BaseModel):
    """Inputs that were not among the predefined options."""

    adjective: Optional[str] = None
    subject: Optional[str] = None


class StoryResponse(BaseModel):
    story: str
    custom_added: Optional[CustomAdditions] = Field(None, serialization_alias="customAdded")
    source: str = "local"
