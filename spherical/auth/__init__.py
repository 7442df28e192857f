from .routes import auth_router
from .helpers import hash_password, verify_password, create_access_token, decode_access_token

__all__ = [
    "auth_router",
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_access_token",
]
