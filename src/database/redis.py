"""
Lightweight in-memory admin config store for local development.

This implements just enough of the interface used by the theme service so
that the FastAPI app can run without a real Redis instance.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Optional


class AdminConfigStore:
    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        # None until an admin saves something, same as an empty Redis key.
        self._config: Optional[Dict[str, Any]] = copy.deepcopy(initial) if initial else None

    def get_admin_config(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._config)

    def save_admin_config(self, config: Dict[str, Any]) -> None:
        self._config = copy.deepcopy(config)

    def ping(self) -> bool:
        return True
