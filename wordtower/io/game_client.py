"""Lightweight HTTP client for the tower game service."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence

import requests

from ..core.exceptions import TowerError
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from ..core.models import Placement


LOGGER = get_logger(__name__)

DEFAULT_BASE_URL = "https://games-test.datsteam.dev"


class GameAPIError(TowerError):
    """Raised when the game service fails or answers with an error payload."""


class GameClient:
    """Minimal client around the game's player REST API.

    Requests are sent once; retry and backoff policy belongs to the caller.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        base_url_env: str = "WORDTOWER_BASE_URL",
        token_env: str = "WORDTOWER_TOKEN",
        timeout_seconds: float = 15.0,
    ) -> None:
        self.base_url = (base_url or os.environ.get(base_url_env) or DEFAULT_BASE_URL).rstrip("/")
        self.token_env = token_env
        self.timeout_seconds = timeout_seconds
        self._token = token or os.environ.get(token_env)
        if not self._token:
            raise RuntimeError(f"Missing game API token in environment variable {self.token_env}")

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------
    def get_words(self) -> Dict[str, Any]:
        return self._request("GET", "/api/words")

    def build(self, placements: Sequence["Placement"], done: bool = True) -> Dict[str, Any]:
        from .commands import build_request

        body = build_request(placements, done=done)
        LOGGER.info("Sending build request with %d words (done=%s)", len(placements), done)
        return self._request("POST", "/api/build", json=body)

    def shuffle(self) -> Dict[str, Any]:
        return self._request("POST", "/api/shuffle")

    def towers(self) -> Dict[str, Any]:
        return self._request("GET", "/api/towers")

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = requests.request(
                method,
                url,
                headers={"X-Auth-Token": self._token, "Content-Type": "application/json"},
                json=json,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise GameAPIError(f"{method} {path} failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError:
            data = {}
        if response.status_code >= 400:
            message = self._extract_error(data) or self._field(data, "message") or response.text
            LOGGER.warning("%s %s answered %s: %s", method, path, response.status_code, message)
            raise GameAPIError(f"{method} {path} answered {response.status_code}: {message}")
        error = self._extract_error(data)
        if error:
            raise GameAPIError(f"{method} {path} returned error: {error}")
        return data

    @staticmethod
    def _extract_error(payload: Any) -> Optional[str]:
        if not isinstance(payload, dict):
            return None
        errors = payload.get("errors")
        if errors:
            return "; ".join(str(item) for item in errors) if isinstance(errors, list) else str(errors)
        return GameClient._field(payload, "error")

    @staticmethod
    def _field(payload: Any, key: str) -> Optional[str]:
        if isinstance(payload, dict) and payload.get(key):
            return str(payload[key])
        return None
