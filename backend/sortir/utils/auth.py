"""Resolve the caller's identity for user-scoped requests."""

from fastapi import Header, HTTPException, status


def get_current_user(
    x_user_id: str | None = Header(None, alias="X-User-Id"),
) -> str:
    """Return the authenticated user id supplied by the session layer."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )

    return x_user_id.strip()
