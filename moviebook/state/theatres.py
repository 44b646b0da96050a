"""
Theatre registry state.
"""
import logging
from typing import Any, Dict, List

from moviebook.database.schemas import Theatre, TheatreCreate
from moviebook.services.api import ApiClient, ApiError, error_message
from moviebook.services.forms import FormValidationError, validate_theatre_form
from moviebook.state.base import StateBase

logger = logging.getLogger(__name__)


class TheatresState(StateBase):
    def __init__(self, api: ApiClient):
        super().__init__()
        self.api = api
        self.theatres: List[Theatre] = []

    def reset(self) -> None:
        super().reset()
        self.theatres = []

    async def fetch_all(self) -> Dict[str, Any]:
        self.loading = True
        self.error = None
        try:
            self.theatres = await self.api.list_theatres()
            return {"ok": True, "theatres": self.theatres}
        except ApiError as e:
            return self._fail(error_message(e, "Failed to fetch theatres"))
        finally:
            self.loading = False

    async def create_one(self, payload: TheatreCreate) -> Dict[str, Any]:
        self.loading = True
        self.error = None
        try:
            theatre = await self.api.create_theatre(payload)
        except ApiError as e:
            return self._fail(error_message(e, "Failed to create theatre"))
        finally:
            self.loading = False

        self.theatres = [*self.theatres, theatre]
        logger.info(f"✓ Created theatre {theatre.id} ({theatre.name})")
        return {"ok": True, "theatre": theatre}

    async def create_from_form(self, form: Dict[str, Any]) -> Dict[str, Any]:
        try:
            payload = validate_theatre_form(form)
        except FormValidationError as e:
            return self._fail(str(e))
        return await self.create_one(payload)
