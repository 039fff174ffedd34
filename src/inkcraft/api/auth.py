"""PIN login and session cookie endpoints."""

from fastapi import APIRouter, Cookie, Depends, Request, Response

from inkcraft.api.dependencies import get_container
from inkcraft.api.schemas import LoginRequest
from inkcraft.containers import AppContainer
from inkcraft.services.auth import SESSION_COOKIE_NAME

router = APIRouter(prefix="/api/auth", tags=["auth"])


async def _submitted_pin(request: Request) -> str:
    """Return the PIN from a JSON body; a missing or unreadable body is empty."""
    try:
        body = LoginRequest.model_validate(await request.json())
    except ValueError:
        return ""
    return "" if body.pin is None else str(body.pin)


@router.get("/status")
async def auth_status(
    admin_token: str | None = Cookie(default=None),
    container: AppContainer = Depends(get_container),
) -> dict[str, bool]:
    """Report whether the caller holds a valid session."""
    return {"authenticated": container.authenticator.verify(admin_token)}


@router.post("/login")
async def login(
    request: Request,
    response: Response,
    container: AppContainer = Depends(get_container),
) -> dict[str, bool]:
    """Exchange the PIN for a session cookie."""
    token = container.authenticator.login(await _submitted_pin(request))
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        max_age=int(container.authenticator.max_age.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=container.settings.is_production,
    )
    return {"ok": True}


@router.post("/logout")
async def logout(
    response: Response, container: AppContainer = Depends(get_container)
) -> dict[str, bool]:
    """Clear the session cookie."""
    response.delete_cookie(
        SESSION_COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=container.settings.is_production,
    )
    return {"ok": True}
