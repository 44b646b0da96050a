from typing import Any, Dict, Optional


class StateBase:
    """Shared loading/error flags for every state object."""

    def __init__(self):
        self.loading: bool = False
        self.error: Optional[str] = None

    def clear_error(self) -> None:
        self.error = None

    def reset(self) -> None:
        self.loading = False
        self.error = None

    def _fail(self, message: str) -> Dict[str, Any]:
        self.error = message
        return {"ok": False, "error": message}
