from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from spherical.config import get_database
from spherical.forms import submit_payload
from spherical.forms.definitions import SIGNUP_FORM
from spherical.utils import success_response
from .schemas import LoginRequest, SignupRequest
from .service import AuthService

auth_router = APIRouter()


def _service(request: Request, db: AsyncIOMotorDatabase) -> AuthService:
    state = request.app.state
    return AuthService(db, state.settings, state.access_policy)


@auth_router.post("/login")
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Authenticate user and return JWT + user data."""
    svc = _service(request, db)
    result = await svc.authenticate(email=body.email, password=body.password)
    return success_response(data=result, message="Login successful")


@auth_router.post("/register")
async def register(
    request: Request,
    body: SignupRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Public sign-up; validated with the signup form rules."""
    svc = _service(request, db)
    user = await submit_payload(body.model_dump(), SIGNUP_FORM, svc.register)
    return success_response(data=user, message="Account created", code=201)
