"""
Form validation engine.

One `Form` tracks the values, errors and touched fields of a single
form instance and guards its submit handler:

    form = Form({"email": ""}, {"email": FieldConfig((Required(), Email()), "Email")})
    form.set_value("email", "not-an-email")
    form.errors        # {"email": "Email must be a valid email address"}

    submit = form.handle_submit(save)
    await submit()     # validates everything; `save` runs only if all pass

Validation failures are data, never exceptions. Only `on_valid` may
raise, and whatever it raises reaches the caller of the submit handler.
"""

import inspect
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from spherical.utils import Logger

from .rules import (
    Custom,
    Email,
    MaxLength,
    MinLength,
    NumberRange,
    Pattern,
    Required,
    Rule,
    Url,
    evaluate,
    rule_rank,
)

logger = Logger("forms")

OnValid = Callable[[dict], Union[Awaitable[None], None]]


@dataclass(frozen=True)
class FieldConfig:
    rules: tuple[Rule, ...] = ()
    label: Optional[str] = None

    def __post_init__(self):
        # fail early on anything outside the rule set
        for rule in self.rules:
            rule_rank(rule)


FormConfig = Mapping[str, FieldConfig]


def parse_field_config(options: Mapping[str, Any]) -> FieldConfig:
    """
    Build a FieldConfig from a plain mapping:

        {"required": True, "min_length": 8, "label": "Password"}

    Recognised keys: required, min_length, max_length, pattern, email,
    url, number, min, max, custom, label.
    """
    known = {
        "required", "min_length", "max_length", "pattern", "email",
        "url", "number", "min", "max", "custom", "label",
    }
    unknown = set(options) - known
    if unknown:
        raise ValueError(f"Unknown rule keys: {', '.join(sorted(unknown))}")

    rules: list[Rule] = []
    if options.get("required"):
        rules.append(Required())
    if options.get("min_length") is not None:
        rules.append(MinLength(options["min_length"]))
    if options.get("max_length") is not None:
        rules.append(MaxLength(options["max_length"]))
    if options.get("pattern") is not None:
        rules.append(Pattern(options["pattern"]))
    if options.get("email"):
        rules.append(Email())
    if options.get("url"):
        rules.append(Url())
    if options.get("number"):
        rules.append(NumberRange(options.get("min"), options.get("max")))
    if options.get("custom") is not None:
        rules.append(Custom(options["custom"]))
    return FieldConfig(tuple(rules), options.get("label"))


@dataclass
class FormState:
    values: dict
    errors: dict = field(default_factory=dict)
    touched: set = field(default_factory=set)
    is_submitting: bool = False
    fields: tuple = ()

    @property
    def is_valid(self) -> bool:
        return not any(self.errors.get(name) for name in self.fields)


class Form:
    def __init__(self, initial_values: Mapping[str, Any], config: Optional[FormConfig] = None):
        self.config: dict[str, FieldConfig] = dict(config or {})
        self._initial = dict(initial_values)
        self._closed = False
        self.state = self._fresh_state(self._initial)

    def _fresh_state(self, values: Mapping[str, Any]) -> FormState:
        return FormState(values=deepcopy(dict(values)), fields=tuple(self.config))

    # ── Read access ──────────────────────────────────────────────

    @property
    def values(self) -> dict:
        return self.state.values

    @property
    def errors(self) -> dict:
        return self.state.errors

    @property
    def touched(self) -> set:
        return self.state.touched

    @property
    def is_valid(self) -> bool:
        return self.state.is_valid

    @property
    def is_submitting(self) -> bool:
        return self.state.is_submitting

    def visible_error(self, name: str) -> Optional[str]:
        """The error to display: only once the field has been touched."""
        if name in self.state.touched:
            return self.state.errors.get(name)
        return None

    # ── Validation ───────────────────────────────────────────────

    def compute_error(self, name: str, values: Optional[Mapping[str, Any]] = None) -> Optional[str]:
        cfg = self.config.get(name)
        if cfg is None or not cfg.rules:
            return None
        values = self.state.values if values is None else values
        return evaluate(cfg.rules, values.get(name), cfg.label or name, values)

    def _store_error(self, name: str, error: Optional[str]) -> None:
        if error:
            self.state.errors[name] = error
        else:
            self.state.errors.pop(name, None)

    def validate_field(self, name: str) -> bool:
        error = self.compute_error(name)
        self._store_error(name, error)
        return error is None

    def validate_form(self) -> bool:
        errors = {}
        for name in self.config:
            error = self.compute_error(name)
            if error:
                errors[name] = error
        self.state.errors = errors
        return not errors

    # ── Mutation ─────────────────────────────────────────────────

    def set_value(self, name: str, value: Any) -> Optional[str]:
        """Store `value` and revalidate this field only."""
        self.state.values[name] = value
        error = self.compute_error(name)
        self._store_error(name, error)
        return error

    def set_values(self, values: Mapping[str, Any]) -> None:
        self.state.values.update(values)

    def set_touched(self, name: str, touched: bool = True) -> None:
        if touched:
            self.state.touched.add(name)
        else:
            self.state.touched.discard(name)

    def set_error(self, name: str, message: str) -> None:
        self.state.errors[name] = message

    def clear_error(self, name: str) -> None:
        self.state.errors.pop(name, None)

    def clear_all_errors(self) -> None:
        self.state.errors = {}

    def reset(self, new_values: Optional[Mapping[str, Any]] = None) -> None:
        values = dict(self._initial)
        if new_values:
            values.update(new_values)
        self.state = self._fresh_state(values)

    def close(self) -> None:
        """Detach the form; a submission still in flight leaves state alone."""
        self._closed = True

    # ── Submission ───────────────────────────────────────────────

    def handle_submit(self, on_valid: OnValid) -> Callable[..., Awaitable[bool]]:
        async def submit(event: Any = None) -> bool:
            prevent_default = getattr(event, "prevent_default", None)
            if callable(prevent_default):
                prevent_default()

            self.state.touched.update(self.config)
            self.state.touched.update(self.state.values)

            if not self.validate_form():
                logger.debug(f"Submit blocked, invalid fields: {sorted(self.state.errors)}")
                return False

            state = self.state
            state.is_submitting = True
            try:
                result = on_valid(dict(state.values))
                if inspect.isawaitable(result):
                    await result
            finally:
                if not self._closed:
                    state.is_submitting = False
            return True

        return submit
