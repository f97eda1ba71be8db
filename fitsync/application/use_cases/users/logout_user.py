"""Use-case for ending a session.

Tokens are stateless, so the server only acknowledges the call; the client
destroys its own copy of the session.
"""

from __future__ import annotations

from fitsync.shared.logging import logger


class LogoutUserUseCase:
    def execute(self, user_id: int | None = None) -> None:
        logger.info(f"auth.logout: acknowledged user={user_id if user_id is not None else 'anonymous'}")
