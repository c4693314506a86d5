"""Small validation helpers shared by entities."""

from .exceptions import ValidationError

DEFAULT_MAX_LENGTH = 200


def require_text(value: str, field: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Strip a required text attribute and check its length.

    Raises:
        ValidationError: If the value is blank or longer than ``max_length``
    """
    cleaned = value.strip() if isinstance(value, str) else ""
    label = field.replace("_", " ").capitalize()
    if not cleaned:
        raise ValidationError(f"{label} cannot be empty", field=field, value=value)
    if len(cleaned) > max_length:
        raise ValidationError(
            f"{label} cannot exceed {max_length} characters", field=field, value=value
        )
    return cleaned


def optional_text(value: str | None, field: str, max_length: int = 2000) -> str | None:
    """Like :func:`require_text`, but blank input becomes ``None``."""
    if value is None or not value.strip():
        return None
    return require_text(value, field, max_length)
