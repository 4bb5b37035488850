"""Story generator exceptions."""

from shared.exceptions import ValidationError


class InputTooSimilarError(ValidationError):
    """Raised when a custom option is too close to a predefined one."""

    def __init__(self, field: str, value: str):
        super().__init__(
            f"Custom {field} too similar to existing options",
            code="INPUT_TOO_SIMILAR",
            details={"field": field, "value": value},
        )
