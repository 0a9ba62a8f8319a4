from __future__ import annotations

import os
from typing import Iterable

from fastapi import Header, HTTPException, status


class ApiKeyAuth:
    """Header check for ``X-API-Key``; open when no keys are configured."""

    def __init__(self, valid_keys: Iterable[str]) -> None:
        self.valid_keys = {key.strip() for key in valid_keys if key and key.strip()}

    @classmethod
    def from_env(cls, variable: str = "API_KEYS") -> "ApiKeyAuth":
        return cls(os.getenv(variable, "").split(","))

    @property
    def enabled(self) -> bool:
        return bool(self.valid_keys)

    def __call__(self, x_api_key: str | None = Header(default=None)) -> None:
        if not self.enabled:
            return
        if not x_api_key or x_api_key not in self.valid_keys:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")
