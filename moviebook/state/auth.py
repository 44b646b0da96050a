"""
Session state: the logged-in user and the login/register/logout actions.
"""
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from moviebook.core.session import SessionContext
from moviebook.database.schemas import SessionUser, UserRole
from moviebook.services.api import ApiClient, ApiError, error_message
from moviebook.services.forms import first_error
from moviebook.state.base import StateBase

logger = logging.getLogger(__name__)

LOGIN_FAILED = "Login failed. Please check your credentials."
REGISTER_FAILED = "Registration failed. Please try again."


class SessionState(StateBase):
    def __init__(self, session: SessionContext, api: ApiClient):
        super().__init__()
        self.session = session
        self.api = api
        self.initialize()

    def initialize(self) -> None:
        """Read the persisted session synchronously; loading stays True until this finishes."""
        self.loading = True
        try:
            self.session.load()
        finally:
            self.loading = False

    def reset(self) -> None:
        super().reset()
        self.initialize()

    @property
    def user(self) -> Optional[SessionUser]:
        return self.session.user

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        self.error = None
        self.loading = True
        try:
            auth = await self.api.login(email, password)
        except ValidationError:
            return self._fail(LOGIN_FAILED)
        except ApiError as e:
            return self._fail(error_message(e, LOGIN_FAILED))
        finally:
            self.loading = False

        self.session.persist(auth.access_token, auth.user)
        logger.info(f"✓ Logged in as {auth.user.email}")
        return {"ok": True, "user": auth.user}

    async def register(self, name: str, email: str, password: str, role: UserRole = UserRole.USER) -> Dict[str, Any]:
        self.error = None
        self.loading = True
        try:
            auth = await self.api.register(name, email, password, role)
        except ValidationError as e:
            return self._fail(first_error(e))
        except ApiError as e:
            return self._fail(error_message(e, REGISTER_FAILED))
        finally:
            self.loading = False

        self.session.persist(auth.access_token, auth.user)
        logger.info(f"✓ Registered {auth.user.email}")
        return {"ok": True, "user": auth.user}

    def logout(self) -> None:
        self.session.clear()
        self.error = None
        logger.info("Logged out")
