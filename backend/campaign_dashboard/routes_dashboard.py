"""
Dashboard API routes for saving all sections at once.
"""

from fastapi import APIRouter

from .auth import UserDep
from .container import ContainerDep, SessionDep
from .errors import error_response
from .schemas import ActionResponse, SaveChangesRequest

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.post("/save-changes", response_model=ActionResponse)
async def save_changes(payload: SaveChangesRequest, session: SessionDep, container: ContainerDep, principal: UserDep):
    result = await container.changes_service(session).save_changes(payload)
    if result.is_err():
        return error_response(result.error)
    return ActionResponse(success=True, message="Dashboard changes saved", data={"saved": result.value})
