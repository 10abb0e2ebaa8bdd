"""Registration, sign-in and the current user's profile."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from commerce.account.registration import RecordLogin, RegisterUser, authenticate
from commerce.account.user import User
from commerce.api.presenters import present_user
from commerce.api.schemas import LoginRequest, RegisterRequest
from shared.api.dependencies import current_principal
from shared.api.envelope import created, ok
from shared.auth import Principal, hash_password, issue_access_token

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _session(user):
    return {
        "user": present_user(user),
        "accessToken": issue_access_token(str(user.id), user.role, email=user.email),
    }


@router.post("/register", status_code=201)
async def register(body: RegisterRequest):
    command = RegisterUser(
        email=body.email.strip().lower(),
        password_hash=hash_password(body.password),
        first_name=body.first_name,
        last_name=body.last_name,
    )
    user_id = current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get_user(user_id)
    return created(_session(user), message="User registered successfully")


@router.post("/login")
async def login(body: LoginRequest):
    user = authenticate(body.email.strip().lower(), body.password)
    current_domain.process(RecordLogin(user_id=user.id), asynchronous=False)
    user = current_domain.repository_for(User).get_user(user.id)
    return ok(_session(user), message="Login successful")


@router.get("/me")
async def me(principal: Principal = Depends(current_principal)):
    user = current_domain.repository_for(User).get_user(principal.user_id)
    return ok(present_user(user))
