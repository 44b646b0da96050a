"""
Session context: the persisted token/user pair and its lifecycle.

load-at-start -> persist on login/register -> clear on logout,
or force_reload() when the backend answers 401.
"""
import json
import logging
from typing import Callable, List, Optional

from pydantic import ValidationError

from moviebook.core.config import STORAGE_KEYS
from moviebook.core.storage import ClientStorage
from moviebook.database.schemas import SessionUser

logger = logging.getLogger(__name__)


class SessionContext:
    def __init__(self, storage: ClientStorage):
        self.storage = storage
        self.token: Optional[str] = None
        self.user: Optional[SessionUser] = None
        self._reload_hooks: List[Callable[[], None]] = []

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def load(self) -> Optional[SessionUser]:
        """Read the persisted pair. A malformed user record is discarded, never raised."""
        self.token = None
        self.user = None
        token = self.storage.get_item(STORAGE_KEYS["TOKEN"])
        user_data = self.storage.get_item(STORAGE_KEYS["USER"])
        if not token or not user_data:
            return None
        try:
            user = SessionUser.model_validate(json.loads(user_data))
        except (ValueError, TypeError, ValidationError) as e:
            logger.error(f"Error initializing session, clearing stored credentials: {e}")
            self.clear()
            return None
        self.token = token
        self.user = user
        return user

    def persist(self, token: str, user: SessionUser) -> None:
        self.storage.set_item(STORAGE_KEYS["TOKEN"], token)
        self.storage.set_item(STORAGE_KEYS["USER"], json.dumps(user.to_payload()))
        self.token = token
        self.user = user

    def clear(self) -> None:
        self.storage.remove_item(STORAGE_KEYS["TOKEN"])
        self.storage.remove_item(STORAGE_KEYS["USER"])
        self.token = None
        self.user = None

    def add_reload_hook(self, hook: Callable[[], None]) -> None:
        self._reload_hooks.append(hook)

    def force_reload(self) -> None:
        """Purge credentials and reset everything that registered a reload hook."""
        logger.warning("⚠ Authorization failed; clearing stored credentials and reloading")
        self.clear()
        for hook in list(self._reload_hooks):
            hook()
