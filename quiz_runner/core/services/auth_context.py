"""Explicit holder of the signed-in user, passed to whoever needs it."""

from __future__ import annotations

import logging
from typing import Callable
from uuid import uuid4

from quiz_runner.core.models import UserSession

logger = logging.getLogger(__name__)

SessionListener = Callable[[UserSession | None], None]


class AuthContext:
    """Tracks the current user session and notifies subscribers when it changes."""

    def __init__(self, user: UserSession | None = None) -> None:
        self._user = user
        self._listeners: list[SessionListener] = []

    @property
    def current_user(self) -> UserSession | None:
        return self._user

    def is_signed_in(self) -> bool:
        return self._user is not None

    def is_admin(self) -> bool:
        return self._user is not None and self._user.is_admin

    def sign_in(
        self,
        display_name: str,
        *,
        email: str | None = None,
        is_admin: bool = False,
        user_id: str | None = None,
    ) -> UserSession:
        cleaned = display_name.strip()
        if not cleaned:
            raise ValueError("Display name must not be empty.")
        user = UserSession(
            user_id=user_id or uuid4().hex,
            display_name=cleaned,
            email=email,
            is_admin=is_admin,
        )
        self._user = user
        logger.info("Signed in as %s (admin=%s)", cleaned, is_admin)
        self._notify()
        return user

    def sign_out(self) -> None:
        if self._user is None:
            return
        logger.info("Signed out %s", self._user.display_name)
        self._user = None
        self._notify()

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register ``listener`` for session changes and return an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._user)
