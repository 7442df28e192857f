"""
Running a form definition against a request payload.

Used by the HTTP layer for public submissions: the payload is loaded into
a fresh Form, submitted, and rejected with every field's error when any
rule fails.
"""

from typing import Any, Awaitable, Callable, Mapping, TypeVar

from .engine import Form, FormConfig

T = TypeVar("T")


class FormRejected(Exception):
    """A submission failed validation; `errors` maps field → message."""

    def __init__(self, errors: Mapping[str, str]):
        self.errors = dict(errors)
        super().__init__("Please fix the form errors before submitting")


async def submit_payload(
    payload: Mapping[str, Any],
    config: FormConfig,
    on_valid: Callable[[dict], Awaitable[T]],
) -> T:
    """
    Validate `payload` against `config` and pass the cleaned values to
    `on_valid`. Keys outside the config are dropped. Raises FormRejected.
    """
    initial = {name: payload.get(name) for name in config}
    form = Form(initial, config)

    outcome: dict[str, Any] = {}

    async def run(values: dict) -> None:
        outcome["result"] = await on_valid(values)

    submitted = await form.handle_submit(run)()
    if not submitted:
        raise FormRejected(form.errors)
    return outcome["result"]
