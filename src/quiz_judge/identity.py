"""
quiz_judge.identity — Player identity
======================================

Establishes the stable id a player's leaderboard entry is keyed by.
Any failure is raised as ``AuthError``, which stops the game from
starting and tells the player to reload or retry.
"""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from firebase_admin import auth as fb_auth
from firebase_admin import exceptions as fb_exceptions

from .errors import AuthError

logger = logging.getLogger("quiz_judge.identity")


class IdentityProvider(ABC):
    """Abstract source of player identities."""

    name = "base"

    @abstractmethod
    def establish(self, display_name: str) -> str:
        """Return a player id. Raises AuthError on failure."""
        ...


class LocalIdentityProvider(IdentityProvider):
    """Random per-process identity; enough for the local stores."""

    name = "local"

    def establish(self, display_name: str) -> str:
        return uuid.uuid4().hex


class FirebaseIdentityProvider(IdentityProvider):
    """Creates an anonymous Firebase Auth user per player.

    The Firebase app is resolved on first use, so a missing or broken
    credential surfaces as ``AuthError`` when the player enters the game.
    """

    name = "firebase"

    def __init__(self, app: Optional[Any] = None, project_id: Optional[str] = None):
        self._app = app
        self._project_id = project_id

    def _get_app(self):
        if self._app is None:
            from ._store.firestore import get_firebase_app
            self._app = get_firebase_app(self._project_id)
        return self._app

    def establish(self, display_name: str) -> str:
        try:
            user = fb_auth.create_user(display_name=display_name, app=self._get_app())
        except (fb_exceptions.FirebaseError, ValueError, RuntimeError, OSError) as e:
            logger.error(f"Firebase sign-in failed: {e}")
            raise AuthError(self.name, e) from e
        logger.info(f"Signed in as {user.uid}")
        return user.uid


def create_identity(name: str, config: Optional[Dict[str, Any]] = None) -> IdentityProvider:
    """Build an identity provider by name (``local`` or ``firebase``)."""
    config = config or {}
    if name == "local":
        return LocalIdentityProvider()
    if name == "firebase":
        return FirebaseIdentityProvider(project_id=config.get("firebase_project_id"))
    raise ValueError(f"Unknown identity provider: {name}")
