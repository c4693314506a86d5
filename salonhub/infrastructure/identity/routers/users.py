import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from starlette import status

from salonhub.application.identity.use_cases.user_management_use_case import (
    UserManagementUseCase,
)
from salonhub.core import container
from salonhub.domain.common.value_objects import TenantId, UserId
from salonhub.infrastructure.common.di import inject_use_case
from salonhub.infrastructure.identity.dependencies import CurrentUser
from salonhub.infrastructure.identity.schemas import UserCreateRequest, UserDetailsResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me")
async def get_me(current_user: CurrentUser) -> UserDetailsResponse:
    """Get the current user's profile information."""
    return UserDetailsResponse.from_domain(current_user)


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_user(
    current_user: CurrentUser,
    user_data: UserCreateRequest,
    use_case: UserManagementUseCase = Depends(
        inject_use_case(container.user_management_use_case)
    ),
) -> UserDetailsResponse:
    """
    Create a staff or customer account.

    Administrators create accounts in their own tenant and may not hand out
    a role above their own.
    """
    user = use_case.create_user(
        current_user,
        email=user_data.email,
        password=user_data.password,
        name=user_data.name,
        role=user_data.role,
        tenant_id=TenantId(user_data.tenant_id) if user_data.tenant_id else None,
    )
    logger.info(f"User {user.id} created by {current_user.id}")
    return UserDetailsResponse.from_domain(user)


@router.post("/{user_id}/unlock")
async def unlock_user(
    user_id: UUID,
    current_user: CurrentUser,
    use_case: UserManagementUseCase = Depends(
        inject_use_case(container.user_management_use_case)
    ),
) -> UserDetailsResponse:
    return UserDetailsResponse.from_domain(use_case.unlock_user(current_user, UserId(user_id)))
