"""Reporter identity and the administrator capability.

The administrator rule is a naming convention (identifier equals or starts
with the reserved token), not an authorization system. It is resolved once
at login into a ``Viewer`` which callers pass explicitly afterwards.
"""
import secrets
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import structlog

from facility_reports.config import settings
from facility_reports.domain.errors import PermissionDenied, ValidationError

logger = structlog.get_logger()


@dataclass(frozen=True)
class Viewer:
    user_id: str
    is_admin: bool = False

    def require_admin(self) -> None:
        if not self.is_admin:
            raise PermissionDenied(f"{self.user_id} is not an administrator")


def login(identifier: str, admin_token: Optional[str] = None) -> Viewer:
    """Resolve a typed identifier into a Viewer capability."""
    token = admin_token if admin_token is not None else settings.admin_token
    user_id = (identifier or "").strip()

    if len(user_id) < settings.min_reporter_id_length:
        raise ValidationError(
            ["identifier"],
            f"Identifier must be at least {settings.min_reporter_id_length} characters",
        )

    return Viewer(user_id=user_id, is_admin=user_id == token or user_id.startswith(token))


class SessionRegistry:
    """In-memory session tokens mapped to resolved viewers."""

    def __init__(self) -> None:
        self._sessions: Dict[str, Viewer] = {}

    def open(self, identifier: str) -> Tuple[str, Viewer]:
        viewer = login(identifier)
        token = secrets.token_urlsafe(24)
        self._sessions[token] = viewer
        logger.info("session_opened", user_id=viewer.user_id, is_admin=viewer.is_admin)
        return token, viewer

    def resolve(self, token: str) -> Optional[Viewer]:
        return self._sessions.get(token)

    def close(self, token: str) -> bool:
        viewer = self._sessions.pop(token, None)
        if viewer is not None:
            logger.info("session_closed", user_id=viewer.user_id)
        return viewer is not None
