"""
Dashboard owners API routes.
"""

from fastapi import APIRouter

from .auth import UserDep
from .container import ContainerDep, SessionDep
from .errors import error_response
from .schemas import OwnerRead, OwnersWrite

router = APIRouter(prefix="/dashboard-owners", tags=["dashboard-owners"])


@router.get("/{slug}", response_model=list[OwnerRead])
async def get_owners(slug: str, session: SessionDep, container: ContainerDep):
    result = await container.owners_service(session).find_by_campaign_slug(slug)
    if result.is_err():
        return error_response(result.error)
    return result.value


@router.post("", response_model=list[OwnerRead])
async def save_owners(payload: OwnersWrite, session: SessionDep, container: ContainerDep, principal: UserDep):
    """Update owners that carry a known id, create the rest."""
    result = await container.owners_service(session).create_or_update(payload.campaign_id, payload.owners)
    if result.is_err():
        return error_response(result.error)
    return result.value
