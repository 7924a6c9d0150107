import hmac

from fastapi import Depends, HTTPException, Request, status

from core.dependencies import get_settings
from core.settings import Settings


def require_shared_secret(
    request: Request, settings: Settings = Depends(get_settings)
) -> None:
    """Reject tool calls without the configured bearer secret.

    An empty SHARED_SECRET leaves the tool endpoints open.
    """
    expected = settings.SHARED_SECRET
    if not expected:
        return

    scheme, _, supplied = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not hmac.compare_digest(
        supplied.strip().encode(), expected.encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing shared secret",
            headers={"WWW-Authenticate": "Bearer"},
        )
