"""Registration, login and token verification."""
from fastapi import APIRouter, Depends, status

from outdoorspot.auth.dependencies import get_current_user
from outdoorspot.auth.security import create_access_token, hash_password, verify_password
from outdoorspot.db.repositories import UserRepository
from outdoorspot.dependencies import get_user_repository
from outdoorspot.errors import AuthenticationError
from outdoorspot.logger import logger
from outdoorspot.models import AuthPayload, Envelope, LoginRequest, RegisterRequest, User

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=Envelope[AuthPayload])
async def register(
    payload: RegisterRequest,
    repo: UserRepository = Depends(get_user_repository),
):
    user = await repo.create(payload, password_hash=hash_password(payload.password))
    logger.info("Registered user {user_id} ({email})", user_id=user.id, email=user.email)
    return Envelope[AuthPayload](
        message="User registered successfully",
        data=AuthPayload(user=user, token=create_access_token(user.id)),
    )


@router.post("/login", response_model=Envelope[AuthPayload])
async def login(
    payload: LoginRequest,
    repo: UserRepository = Depends(get_user_repository),
):
    credentials = await repo.get_credentials(payload.email)
    if credentials is None or not verify_password(payload.password, credentials[1]):
        logger.info("Failed login for {email}", email=payload.email)
        raise AuthenticationError("Invalid email or password")

    user, _ = credentials
    if not user.is_active:
        raise AuthenticationError("Invalid email or password")

    return Envelope[AuthPayload](
        message="Login successful",
        data=AuthPayload(user=user, token=create_access_token(user.id)),
    )


@router.get("/verify", response_model=Envelope[User])
async def verify(user: User = Depends(get_current_user)):
    return Envelope[User](data=user)
