"""
API v1 routes.

Defines REST endpoints for the User Registration API.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_registration_service
from src.api.models import ErrorResponse, RegisterRequest, UserResponse
from src.domain.exceptions import EmailAlreadyRegistered, InvalidFormat, UnexpectedError
from src.domain.registration import RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "",
    response_model=list[UserResponse],
    responses={
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="List registered users",
    description="Returns the public view of every registered user.",
)
async def list_users(
    service: RegistrationService = Depends(get_registration_service),
) -> list[UserResponse]:
    """List every registered user (id, timestamps, token, active flag)."""
    try:
        views = service.list_all()
    except UnexpectedError:
        logger.exception("Listing users failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from None
    return [UserResponse.from_view(view) for view in views]


@router.post(
    "/sign-up",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid email, password or phone"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        422: {"description": "Validation error"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Register a new user",
    description="Submit name, email, password and phones to create a user. "
    "The response carries the signed token issued for the new user.",
)
async def sign_up(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> UserResponse:
    """
    Register a new user and issue their token.

    - **name**: Display name
    - **email**: Email matching the configured pattern
    - **password**: Password matching the configured pattern
    - **phones**: List of {number, citycode, contrycode}
    """
    try:
        view = service.register(
            request_data.name,
            request_data.email,
            request_data.password,
            [phone.to_domain() for phone in request_data.phones],
        )
    except InvalidFormat as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from None
    except EmailAlreadyRegistered:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        ) from None
    except UnexpectedError:
        logger.exception("Registration failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from None
    return UserResponse.from_view(view)
