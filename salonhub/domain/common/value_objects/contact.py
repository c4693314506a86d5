"""Contact value objects: email, phone number and postal address."""

import re
from dataclasses import dataclass

from ..exceptions import ValidationError
from ..value_object import ValueObject

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]+$")
_PHONE_SEPARATORS = re.compile(r"[\s\-()]")

MAX_EMAIL_LENGTH = 254
MIN_PHONE_DIGITS = 10
MAX_PHONE_DIGITS = 15


@dataclass(frozen=True)
class Email(ValueObject):
    """E-mail address, normalised to lower case."""

    value: str

    def __post_init__(self) -> None:
        raw = self.value.strip() if isinstance(self.value, str) else ""
        if not raw or len(raw) > MAX_EMAIL_LENGTH or not _EMAIL_PATTERN.match(raw):
            raise ValidationError("Invalid email format", field="email", value=self.value)
        object.__setattr__(self, "value", raw.lower())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PhoneNumber(ValueObject):
    """Phone number stored without separators, optionally prefixed with '+'."""

    value: str
    country: str | None = None

    def __post_init__(self) -> None:
        raw = self.value.strip() if isinstance(self.value, str) else ""
        if not raw or not _PHONE_PATTERN.match(raw):
            raise ValidationError("Invalid phone number format", field="phone", value=self.value)

        cleaned = _PHONE_SEPARATORS.sub("", raw)
        digits = cleaned.lstrip("+")
        if not MIN_PHONE_DIGITS <= len(digits) <= MAX_PHONE_DIGITS or "+" in digits:
            raise ValidationError("Invalid phone number format", field="phone", value=self.value)
        object.__setattr__(self, "value", cleaned)

    def to_primitive(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Address(ValueObject):
    """Postal address of a branch."""

    street: str
    city: str
    state: str
    zip_code: str
    country: str

    def __post_init__(self) -> None:
        for name in ("street", "city", "state", "zip_code", "country"):
            raw = getattr(self, name)
            cleaned = raw.strip() if isinstance(raw, str) else ""
            if not cleaned:
                label = name.replace("_", " ").capitalize()
                raise ValidationError(f"{label} is required", field=name, value=raw)
            object.__setattr__(self, name, cleaned)

    def __str__(self) -> str:
        return f"{self.street}, {self.city}, {self.state} {self.zip_code}, {self.country}"
