from pydantic import BaseModel, EmailStr
from typing import Optional


class LoginRequest(BaseModel):
    """POST /auth/login"""
    email: EmailStr
    password: str


class SignupRequest(BaseModel):
    """POST /auth/register; field rules come from the signup form."""
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = None
    accept_terms: Optional[bool] = None
