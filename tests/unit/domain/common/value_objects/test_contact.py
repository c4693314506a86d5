"""Tests for Email, PhoneNumber and Address value objects."""

import pytest

from salonhub.domain.common.exceptions import ValidationError
from salonhub.domain.common.value_objects import Address, Email, PhoneNumber


def test_email_is_normalised_to_lower_case() -> None:
    assert Email("  Jane.Doe@Example.COM ").value == "jane.doe@example.com"


@pytest.mark.parametrize("raw", ["", "no-at-sign", "a@b", "two@@example.com", "sp ace@x.io"])
def test_invalid_email_rejected(raw: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        Email(raw)
    assert exc_info.value.field == "email"


def test_phone_separators_are_stripped() -> None:
    assert PhoneNumber("+1 (555) 123-4567").value == "+15551234567"


@pytest.mark.parametrize("raw", ["12345", "1234567890123456", "555-CALL-NOW", "12+3456789012"])
def test_invalid_phone_rejected(raw: str) -> None:
    with pytest.raises(ValidationError):
        PhoneNumber(raw)


def test_address_fields_are_trimmed() -> None:
    address = Address(" 1 Main St ", "Springfield", "IL", "62701", "US")
    assert address.street == "1 Main St"
    assert str(address) == "1 Main St, Springfield, IL 62701, US"


def test_address_requires_every_field() -> None:
    with pytest.raises(ValidationError) as exc_info:
        Address("1 Main St", "Springfield", "IL", "  ", "US")
    assert exc_info.value.field == "zip_code"
