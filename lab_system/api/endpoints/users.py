"""
User API endpoints.

- POST  /users  - Register a new teacher, technical staff member, or admin
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lab_system.api.responses import json_response
from lab_system.db.session import get_db
from lab_system.docs.error_examples import validation_error_response
from lab_system.models.user import User
from lab_system.repositories.user_repo import UserRepository
from lab_system.schemas.common import ErrorResponse
from lab_system.schemas.user import UserCreate, UserCreatedResponse, UserRead
from lab_system.services.user_service import UserService

router = APIRouter()


# ── Dependency injection ──


def _get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    """Build a UserService wired to the current request's DB session."""
    return UserService(UserRepository(User, db))


# ── Endpoints ──


@router.post(
    "",
    response_model=UserCreatedResponse,
    status_code=201,
    summary="Create a new user",
    description=(
        "Registers a teacher, technical staff member, or admin.  The email "
        "must be unique; a 409 Conflict is returned if it is already in use.  "
        "The password hash is never returned."
    ),
    responses={
        409: json_response(ErrorResponse, "Duplicate email address"),
        422: validation_error_response(UserCreate),
        500: json_response(
            ErrorResponse,
            "Internal Server Error",
            example={"message": "Internal Server Error", "errors": None},
        ),
    },
)
async def create_user(
    user: UserCreate,
    service: UserService = Depends(_get_user_service),
) -> UserCreatedResponse:
    created = await service.create_user(user)
    return UserCreatedResponse(
        message="User created successfully",
        data=UserRead.model_validate(created),
    )
