"""
Base class for value objects.

Value objects (money, contact details, opening hours, plan limits) have no
identity: two instances with the same attributes are interchangeable.
Subclasses are frozen dataclasses, so equality and hashing come from the
generated dataclass methods and validation lives in ``__post_init__``.

Example:
    @dataclass(frozen=True)
    class PhoneNumber(ValueObject):
        value: str

        def __post_init__(self) -> None:
            digits = re.sub(r"\\D", "", self.value)
            if not 7 <= len(digits) <= 15:
                raise ValidationError("Invalid phone number", field="phone")
            object.__setattr__(self, "value", digits)
"""

from dataclasses import fields, is_dataclass


class ValueObject:
    """Immutable, compared by value, validated on construction."""

    def _attributes(self) -> dict[str, object]:
        if is_dataclass(self):
            return {f.name: getattr(self, f.name) for f in fields(self)}
        return dict(vars(self))

    def to_primitive(self) -> object:
        """
        Plain form used for JSON columns and event payloads.

        Single-attribute value objects collapse to that attribute; others
        become a dict. Subclasses with nested values override this.
        """
        attributes = self._attributes()
        if len(attributes) == 1:
            return next(iter(attributes.values()))
        return attributes
