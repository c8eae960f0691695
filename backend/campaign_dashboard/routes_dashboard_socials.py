"""
Dashboard socials API routes.
"""

from fastapi import APIRouter

from .auth import UserDep
from .container import ContainerDep, SessionDep
from .errors import error_response
from .schemas import SocialsRead, SocialsWrite

router = APIRouter(prefix="/dashboard-socials", tags=["dashboard-socials"])


@router.get("/{slug}", response_model=SocialsRead)
async def get_socials(slug: str, session: SessionDep, container: ContainerDep):
    """Socials for a campaign, falling back to the issuer profile."""
    result = await container.socials_service(session).find_by_campaign_slug(slug)
    if result.is_err():
        return error_response(result.error)
    return result.value


@router.post("", response_model=SocialsRead)
async def save_socials(payload: SocialsWrite, session: SessionDep, container: ContainerDep, principal: UserDep):
    result = await container.socials_service(session).create_or_update(payload)
    if result.is_err():
        return error_response(result.error)
    return result.value
