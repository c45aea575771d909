"""
Per-request identity resolved from the signed session cookie.

Routers receive an ``Identity`` through ``Depends`` and hand it to the
services explicitly; nothing below the routers reads the session.
"""

import logging
import time
from dataclasses import dataclass

from starlette.requests import Request

from app.core.config import SESSION_MAX_AGE
from app.models.user import ROLE_ADMIN, ROLE_STUDENT, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    user_id: int | None = None
    username: str | None = None
    role: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.role == ROLE_ADMIN

    @property
    def is_student(self) -> bool:
        return self.is_authenticated and self.role == ROLE_STUDENT


ANONYMOUS = Identity()


def start_session(request: Request, user: User) -> Identity:
    request.session.clear()
    request.session.update(
        {
            "user_id": user.id,
            "username": user.username,
            "role": user.role,
            "issued_at": int(time.time()),
        }
    )
    return Identity(user_id=user.id, username=user.username, role=user.role)


def end_session(request: Request) -> None:
    request.session.clear()


def get_current_identity(request: Request) -> Identity:
    session = request.session
    user_id = session.get("user_id")
    if user_id is None:
        return ANONYMOUS

    # the cookie is re-signed on every response, so the lifetime is counted from login
    issued_at = session.get("issued_at", 0)
    if time.time() - issued_at > SESSION_MAX_AGE.total_seconds():
        logger.info("Session for %s expired", session.get("username"))
        session.clear()
        return ANONYMOUS

    return Identity(
        user_id=user_id,
        username=session.get("username"),
        role=session.get("role"),
    )
