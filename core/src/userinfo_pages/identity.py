from __future__ import annotations

from typing import Final

from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader

USER_ID_HEADER: Final[str] = "X-User-Id"
MISSING_USER_ID_MESSAGE: Final[str] = f"User ID header ({USER_ID_HEADER}) not found"

_user_id_scheme = APIKeyHeader(
    name=USER_ID_HEADER,
    auto_error=False,
    description="Logged-in user identifier, set by the upstream auth proxy.",
)


async def require_user_id(
    user_id: str | None = Security(_user_id_scheme),  # noqa: B008
) -> str:
    """Return the raw X-User-Id header value.

    An absent or empty header is a client error (400). The value is otherwise opaque
    and returned untouched.
    """

    if not user_id:
        raise HTTPException(status_code=400, detail=MISSING_USER_ID_MESSAGE)
    return user_id
