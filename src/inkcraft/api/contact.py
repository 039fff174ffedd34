"""Contact details endpoints."""

from fastapi import APIRouter, Depends

from inkcraft.api.dependencies import get_container, require_auth
from inkcraft.api.schemas import (
    ContactUpdateRequest,
    contact_to_json,
    contact_with_avatar_url,
)
from inkcraft.containers import AppContainer

router = APIRouter(prefix="/api/contact", tags=["contact"])


@router.get("")
async def get_contact(
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Return contact details with the resolved avatar URL."""
    return contact_with_avatar_url(container.contact_service.get_contact())


@router.put("", dependencies=[Depends(require_auth)])
async def update_contact(
    body: ContactUpdateRequest,
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Merge the supplied fields into the contact record."""
    updated = container.contact_service.update_contact(body.model_dump())
    return contact_to_json(updated)
