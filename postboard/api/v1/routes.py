"""
API v1 user routes.

Defines the unauthenticated account endpoints:
- POST /users - Register a new user
- GET /users/activate/{user_id} - Activate an account
- POST /login - Exchange credentials for a bearer token
"""

from fastapi import APIRouter, Depends, HTTPException, status

from postboard.api.dependencies import get_user_service
from postboard.api.models import (
    ErrorResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserResponse,
)
from postboard.domain.exceptions import (
    AccountNotActivated,
    EmailAlreadyRegistered,
    InvalidCredentials,
    MalformedIdentifier,
    UserNotFound,
)
from postboard.domain.users import UserService

router = APIRouter(tags=["users"])


@router.post(
    "/users",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Invalid data or missing fields"}},
    summary="Register a new user",
    description="Create an account. When activation is required the account starts "
    "inactive and an activation link is sent out of band.",
)
async def register(
    request_data: RegisterRequest,
    service: UserService = Depends(get_user_service),
) -> RegisterResponse:
    """
    Register a new user.

    - **name**: Display name
    - **email**: Valid email address
    - **password**: Password (8 to 72 bytes)
    - **bio**: Optional biography
    """
    try:
        user = service.register(
            request_data.name,
            request_data.email,
            request_data.password,
            request_data.bio,
        )
    except EmailAlreadyRegistered:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid data or missing fields",
        ) from None

    message = "User created. Check activation link." if service.require_activation else "User created."
    return RegisterResponse(message=message, user=UserResponse.from_entity(user))


@router.get(
    "/users/activate/{user_id}",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid ID"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
    summary="Activate an account",
)
async def activate(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Activate the account referenced by the emitted activation link."""
    try:
        service.activate(user_id)
    except MalformedIdentifier:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid ID") from None
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found") from None
    return MessageResponse(message="User activated successfully")


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Login failed"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        403: {"model": ErrorResponse, "description": "Account not activated"},
    },
    summary="Log in",
    description="Verify email and password and issue a bearer token valid for one hour.",
)
async def login(
    request_data: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Exchange credentials for a signed bearer token."""
    try:
        token = service.login(request_data.email, request_data.password)
    except InvalidCredentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        ) from None
    except AccountNotActivated:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account not activated",
        ) from None
    return TokenResponse(token=token)
