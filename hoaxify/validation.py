"""Field validators for request payloads.

A validator is an ordered list of rules for a single field. Rules run in
order and the first failure records its message key for that field; later
rules for the same field are skipped. Validators are checked in the order
they are listed, so the error dict preserves field order.

    validators = [
        FieldValidator("username").not_empty("username_null").length(4, 32, "username_size"),
        FieldValidator("email").not_empty("email_null").is_email("email_invalid"),
    ]
    errors = validate(payload, validators)
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from email_validator import EmailNotValidError, validate_email

from hoaxify.exceptions import ValidationException

PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).*$")

Check = Callable[[Any], bool]


def is_valid_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


@dataclass
class FieldValidator:
    """Ordered rules for one field of the payload."""

    name: str
    optional: bool = False
    rules: list[tuple[Check, str]] = field(default_factory=list)

    def rule(self, check: Check, message_key: str) -> "FieldValidator":
        self.rules.append((check, message_key))
        return self

    def not_empty(self, message_key: str) -> "FieldValidator":
        return self.rule(lambda v: v is not None and str(v) != "", message_key)

    def length(self, minimum: int, maximum: int | None, message_key: str) -> "FieldValidator":
        def check(value: Any) -> bool:
            if not isinstance(value, str):
                return False
            return len(value) >= minimum and (maximum is None or len(value) <= maximum)

        return self.rule(check, message_key)

    def is_email(self, message_key: str) -> "FieldValidator":
        return self.rule(is_valid_email, message_key)

    def matches(self, pattern: re.Pattern, message_key: str) -> "FieldValidator":
        return self.rule(lambda v: isinstance(v, str) and pattern.match(v) is not None, message_key)

    def custom(self, check: Check, message_key: str) -> "FieldValidator":
        return self.rule(check, message_key)

    def first_error(self, value: Any) -> str | None:
        if self.optional and (value is None or value == ""):
            return None
        for check, message_key in self.rules:
            if not check(value):
                return message_key
        return None


def validate(data: dict[str, Any], validators: list[FieldValidator]) -> dict[str, str]:
    """Run validators against data. Returns {field: message_key} for failing fields."""
    errors = {}
    for validator in validators:
        message_key = validator.first_error(data.get(validator.name))
        if message_key:
            errors[validator.name] = message_key
    return errors


def ensure_valid(data: dict[str, Any], validators: list[FieldValidator]) -> None:
    """Raise ValidationException when any validator fails."""
    errors = validate(data, validators)
    if errors:
        raise ValidationException(errors)


def username_validator() -> FieldValidator:
    return FieldValidator("username").not_empty("username_null").length(4, 32, "username_size")


def password_validator() -> FieldValidator:
    return (
        FieldValidator("password")
        .not_empty("password_null")
        .length(6, None, "password_size")
        .matches(PASSWORD_PATTERN, "password_pattern")
    )
