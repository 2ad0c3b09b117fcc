"""Form Validation — declarative field rules evaluated before storage is touched.

Invariants:
    - Every field in a FormSpec is checked; errors accumulate per field (no short-circuit across fields)
    - Within one field, rules stop at the first failure (one message per field per rule chain)
    - A FormResult is valid only when no field has errors — no partial success
    - Pure: no IO, no async (storage-backed rules live in services/forms.py)

Design Decisions:
    - Rules are plain callables (value, form) -> message | None: cheap to compose and test
    - strip=False for password fields: whitespace is significant in secrets
"""

from dataclasses import dataclass, field
from typing import Callable, Mapping

# (value, all sanitized fields) -> error message, or None when the rule passes
Rule = Callable[[str, Mapping[str, str]], str | None]


def required(value: str, form: Mapping[str, str]) -> str | None:
    """Reject empty fields."""
    if not value:
        return "This field is required."
    return None


def max_length(limit: int) -> Rule:
    """Reject values longer than `limit` characters."""
    def check(value: str, form: Mapping[str, str]) -> str | None:
        if len(value) > limit:
            return f"Must be at most {limit} characters."
        return None
    return check


def max_bytes(limit: int) -> Rule:
    """Reject values whose UTF-8 encoding exceeds `limit` bytes."""
    def check(value: str, form: Mapping[str, str]) -> str | None:
        if len(value.encode("utf-8")) > limit:
            return f"Must be at most {limit} bytes."
        return None
    return check


def match_field(other: str) -> Rule:
    """Reject when this field differs from `other` (password confirmation)."""
    def check(value: str, form: Mapping[str, str]) -> str | None:
        if value != form.get(other, ""):
            return f"Does not match {other}."
        return None
    return check


@dataclass(frozen=True)
class FieldSpec:
    rules: tuple[Rule, ...] = ()
    strip: bool = True


FormSpec = Mapping[str, FieldSpec]


@dataclass
class FormResult:
    """Outcome of a form check — sanitized data plus per-field errors."""
    data: dict[str, str]
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, name: str, message: str) -> None:
        self.errors.setdefault(name, []).append(message)


def sanitize(spec: FormSpec, raw: Mapping[str, object]) -> dict[str, str]:
    """Coerce raw inputs to strings; missing fields become empty."""
    data = {}
    for name, field_spec in spec.items():
        value = raw.get(name)
        text = "" if value is None else str(value)
        data[name] = text.strip() if field_spec.strip else text
    return data


def check_form(spec: FormSpec, raw: Mapping[str, object]) -> FormResult:
    """Run every field's rules against sanitized data. Pure, no IO."""
    data = sanitize(spec, raw)
    result = FormResult(data=data)
    for name, field_spec in spec.items():
        for rule in field_spec.rules:
            message = rule(data[name], data)
            if message:
                result.add_error(name, message)
                break
    return result
