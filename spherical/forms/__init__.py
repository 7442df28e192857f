from .rules import (
    Rule,
    Required,
    MinLength,
    MaxLength,
    Pattern,
    Email,
    Url,
    NumberRange,
    Custom,
    evaluate,
)
from .engine import FieldConfig, FormState, Form, parse_field_config
from .common import COMMON_RULES
from .submission import FormRejected, submit_payload

__all__ = [
    "Rule",
    "Required",
    "MinLength",
    "MaxLength",
    "Pattern",
    "Email",
    "Url",
    "NumberRange",
    "Custom",
    "evaluate",
    "FieldConfig",
    "FormState",
    "Form",
    "parse_field_config",
    "COMMON_RULES",
    "FormRejected",
    "submit_payload",
]
