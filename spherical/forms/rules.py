"""
Validation rules.

A field's rules are a closed set of variants. Whatever order they are
declared in, they are evaluated in RULE_ORDER and the first failure
supplies the field's error message:

    Required → MinLength → MaxLength → Pattern → Email → Url
             → NumberRange → Custom
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Pattern as RegexPattern, Union

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
URL_RE = re.compile(r"^https?://.+")

CustomValidator = Callable[[Any, Mapping[str, Any]], Optional[str]]


@dataclass(frozen=True)
class Required:
    pass


@dataclass(frozen=True)
class MinLength:
    length: int


@dataclass(frozen=True)
class MaxLength:
    length: int


@dataclass(frozen=True)
class Pattern:
    regex: Union[str, RegexPattern]
    message: Optional[str] = None

    @property
    def compiled(self) -> RegexPattern:
        if isinstance(self.regex, str):
            return re.compile(self.regex)
        return self.regex


@dataclass(frozen=True)
class Email:
    pass


@dataclass(frozen=True)
class Url:
    pass


@dataclass(frozen=True)
class NumberRange:
    """Declares the field numeric; `min`/`max` bound it when given."""

    min: Optional[float] = None
    max: Optional[float] = None


@dataclass(frozen=True)
class Custom:
    """`validator(value, all_values)` returns a message or None.

    With `when_empty=True` it also runs on an empty, non-required field,
    for conditions like "required when another field says so".
    """

    validator: CustomValidator
    when_empty: bool = False


Rule = Union[Required, MinLength, MaxLength, Pattern, Email, Url, NumberRange, Custom]

RULE_ORDER: tuple[type, ...] = (
    Required,
    MinLength,
    MaxLength,
    Pattern,
    Email,
    Url,
    NumberRange,
    Custom,
)


def rule_rank(rule: Rule) -> int:
    for index, kind in enumerate(RULE_ORDER):
        if isinstance(rule, kind):
            return index
    raise TypeError(f"Unsupported validation rule: {rule!r}")


def is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def _fmt(number: float) -> str:
    return str(int(number)) if float(number).is_integer() else str(number)


def check_rule(rule: Rule, value: Any, label: str, all_values: Mapping[str, Any]) -> Optional[str]:
    """Evaluate one rule. Returns an error message or None."""
    if isinstance(rule, Required):
        return f"{label} is required" if is_empty(value) else None

    if isinstance(rule, MinLength):
        if isinstance(value, str) and len(value) < rule.length:
            return f"{label} must be at least {rule.length} characters"
        return None

    if isinstance(rule, MaxLength):
        if isinstance(value, str) and len(value) > rule.length:
            return f"{label} must be no more than {rule.length} characters"
        return None

    if isinstance(rule, Pattern):
        if isinstance(value, str) and not rule.compiled.search(value):
            return rule.message or f"{label} format is invalid"
        return None

    if isinstance(rule, Email):
        if isinstance(value, str) and not EMAIL_RE.match(value):
            return f"{label} must be a valid email address"
        return None

    if isinstance(rule, Url):
        if isinstance(value, str) and not URL_RE.match(value):
            return f"{label} must be a valid URL"
        return None

    if isinstance(rule, NumberRange):
        number = _to_number(value)
        if number is None:
            return f"{label} must be a valid number"
        if rule.min is not None and number < rule.min:
            return f"{label} must be at least {_fmt(rule.min)}"
        if rule.max is not None and number > rule.max:
            return f"{label} must be no more than {_fmt(rule.max)}"
        return None

    if isinstance(rule, Custom):
        return rule.validator(value, all_values)

    raise TypeError(f"Unsupported validation rule: {rule!r}")


def evaluate(
    rules: tuple[Rule, ...],
    value: Any,
    label: str,
    all_values: Mapping[str, Any],
) -> Optional[str]:
    """
    Run `rules` in RULE_ORDER, returning the first failure.

    An empty value on a field without Required skips every other rule
    except Custom(when_empty=True).
    """
    ordered = sorted(rules, key=rule_rank)
    required = any(isinstance(r, Required) for r in ordered)
    if not required and is_empty(value):
        ordered = [r for r in ordered if isinstance(r, Custom) and r.when_empty]

    for rule in ordered:
        error = check_rule(rule, value, label, all_values)
        if error:
            return error
    return None
