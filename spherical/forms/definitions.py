"""
Field configurations of the public and back-office forms.

The HTTP layer validates submissions with the same definitions the
site's forms use, so a request rejected here shows the same messages.
"""

from .common import COMMON_RULES, PHONE_RE
from .engine import FieldConfig
from .rules import Custom, MaxLength, MinLength, NumberRange, Pattern, Required

SERVICE_TYPES = (
    "gis_mapping",
    "remote_sensing",
    "solar_installation",
    "consultancy",
    "other",
)

BUDGETS = (
    "less_than_5000",
    "5000_to_10000",
    "10000_to_50000",
    "more_than_50000",
    "not_sure",
)

TIMEFRAMES = (
    "immediate",
    "within_1_month",
    "1_to_3_months",
    "3_to_6_months",
    "more_than_6_months",
)


def one_of(choices, message):
    def check(value, _values):
        return None if value in choices else message

    return Custom(check)


def matches_field(other: str, message: str):
    def check(value, values):
        return None if value == values.get(other) else message

    return Custom(check)


def _other_service_type(value, values):
    if values.get("service_type") == "other" and not value:
        return "Please specify the other service type"
    return None


LOGIN_FORM = {
    "email": FieldConfig(COMMON_RULES["email"], "Email"),
    "password": FieldConfig((Required(), MinLength(6)), "Password"),
}

SIGNUP_FORM = {
    "name": FieldConfig((Required(), MinLength(2)), "Name"),
    "email": FieldConfig(COMMON_RULES["email"], "Email"),
    "password": FieldConfig((Required(), MinLength(8)), "Password"),
    "confirm_password": FieldConfig(
        (Required(), matches_field("password", "Passwords do not match")),
        "Confirm Password",
    ),
    "accept_terms": FieldConfig((Required(),), "Terms acceptance"),
}

CONTACT_FORM = {
    "name": FieldConfig(COMMON_RULES["name"], "Full Name"),
    "email": FieldConfig(COMMON_RULES["email"], "Email Address"),
    "phone": FieldConfig(
        (Required(), MinLength(10), MaxLength(15), Pattern(PHONE_RE)),
        "Phone Number",
    ),
    "subject": FieldConfig((Required(), MinLength(5), MaxLength(100)), "Subject"),
    "message": FieldConfig((Required(), MinLength(10), MaxLength(1000)), "Message"),
}

QUOTE_FORM = {
    "name": FieldConfig(COMMON_RULES["name"], "Name"),
    "email": FieldConfig(COMMON_RULES["email"], "Email"),
    "phone": FieldConfig((Required(), MinLength(10)), "Phone"),
    "company": FieldConfig((), "Company"),
    "service_type": FieldConfig(
        (Required(), one_of(SERVICE_TYPES, "Please select a valid service type")),
        "Service Type",
    ),
    "other_service_type": FieldConfig(
        (Custom(_other_service_type, when_empty=True),), "Other Service Type"
    ),
    "project_description": FieldConfig(
        (Required(), MinLength(20)), "Project Description"
    ),
    "budget": FieldConfig(
        (Required(), one_of(BUDGETS, "Please select a valid budget")), "Budget"
    ),
    "timeframe": FieldConfig(
        (Required(), one_of(TIMEFRAMES, "Please select a valid timeframe")),
        "Timeframe",
    ),
    "additional_info": FieldConfig((MaxLength(2000),), "Additional Information"),
}

PRODUCT_FORM = {
    "name": FieldConfig((Required(), MinLength(2)), "Product name"),
    "description": FieldConfig((Required(), MinLength(10)), "Description"),
    "category": FieldConfig((Required(), MinLength(2)), "Category"),
    "price": FieldConfig((Required(), NumberRange(min=0)), "Price"),
    "cost_price": FieldConfig((NumberRange(min=0),), "Cost price"),
    "sku": FieldConfig((Required(), MinLength(2)), "SKU"),
}
