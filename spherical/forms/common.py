"""Reusable rule sets shared by the site's forms."""

from .rules import Email, MaxLength, MinLength, Pattern, Required, Url

NAME_RE = r"^[a-zA-Z\s]+$"
PHONE_RE = r"^[\+]?[1-9][\d]{0,15}$"
STRONG_PASSWORD_RE = r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]"

COMMON_RULES = {
    "email": (Required(), Email(), MaxLength(255)),
    "password": (Required(), MinLength(8), Pattern(STRONG_PASSWORD_RE)),
    "name": (Required(), MinLength(2), MaxLength(50), Pattern(NAME_RE)),
    "phone": (Pattern(PHONE_RE),),
    "url": (Url(),),
    "required": (Required(),),
}
