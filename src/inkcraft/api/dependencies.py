"""Shared FastAPI dependencies."""

from fastapi import Cookie, Depends, Request

from inkcraft.containers import AppContainer
from inkcraft.domain.errors import UnauthenticatedError


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


async def require_auth(
    admin_token: str | None = Cookie(default=None),
    container: AppContainer = Depends(get_container),
) -> None:
    """Ensure the request carries a valid session cookie."""
    if not admin_token or not container.authenticator.verify(admin_token):
        raise UnauthenticatedError()
