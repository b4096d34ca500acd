"""HTTP client for the OutdoorSpot API with an explicit auth session."""
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from outdoorspot.logger import logger


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


@dataclass
class AuthSession:
    """Token and user of the signed-in account. Persisted as JSON on request."""
    token: Optional[str] = None
    user: Optional[Dict[str, Any]] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token and self.user)

    @classmethod
    def load(cls, path: Path) -> "AuthSession":
        """Read a saved session. A missing or corrupt file gives an empty one."""
        try:
            stored = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return cls()
        if not isinstance(stored, dict) or not stored.get("token") or not stored.get("user"):
            return cls()
        return cls(token=stored["token"], user=stored["user"])

    def save(self, path: Path):
        if not self.is_authenticated:
            self.clear(path)
            return
        Path(path).write_text(json.dumps({"token": self.token, "user": self.user}), encoding="utf-8")

    def clear(self, path: Optional[Path] = None):
        self.token = None
        self.user = None
        if path is not None:
            Path(path).unlink(missing_ok=True)


class OutdoorSpotClient:
    """Thin wrapper over `httpx.Client`. Pass `transport` to stub the server in tests."""

    def __init__(
            self,
            base_url: str,
            session: Optional[AuthSession] = None,
            transport: Optional[httpx.BaseTransport] = None,
            timeout: float = 10.0):
        self.session = session if session is not None else AuthSession()
        self._http = httpx.Client(base_url=base_url, transport=transport, timeout=timeout)

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        headers = kwargs.pop("headers", {})
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        params = kwargs.pop("params", None)
        if params:
            kwargs["params"] = {k: v for k, v in params.items() if v is not None}
        response = self._http.request(method, path, headers=headers, **kwargs)
        try:
            body = response.json()
        except ValueError:
            body = {}
        if response.is_error:
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(response.status_code, message or response.reason_phrase)
        return body

    # --- auth ---

    def _start_session(self, body: Dict[str, Any]) -> Dict[str, Any]:
        payload = body.get("data") or {}
        self.session.token = payload.get("token")
        self.session.user = payload.get("user")
        return payload.get("user") or {}

    def register(self, email: str, username: str, password: str, **profile) -> Dict[str, Any]:
        body = self._request(
            "POST", "/api/auth/register",
            json={"email": email, "username": username, "password": password, **profile},
        )
        return self._start_session(body)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        body = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        return self._start_session(body)

    def verify(self) -> Optional[Dict[str, Any]]:
        """Refresh the session user. A rejected token ends the session."""
        if not self.session.token:
            return None
        try:
            body = self._request("GET", "/api/auth/verify")
        except ApiError as e:
            if e.status_code == 401:
                logger.info("Stored token rejected, clearing session")
                self.session.clear()
                return None
            raise
        self.session.user = body.get("data")
        return self.session.user

    def logout(self):
        self.session.clear()

    # --- search ---

    def search_locations(self, q=None, activity=None, state=None, limit=None) -> Dict[str, Any]:
        return self._request(
            "GET", "/api/search/locations",
            params={"q": q, "activity": activity, "state": state, "limit": limit},
        )

    def search_all(self, q=None, activity=None, state=None, category=None, type=None) -> Dict[str, Any]:  # pylint: disable=redefined-builtin
        return self._request(
            "GET", "/api/search",
            params={"q": q, "activity": activity, "state": state, "category": category, "type": type},
        )

    def nearby(self, lat: float, lng: float, radius=None, limit=None) -> Dict[str, Any]:
        return self._request(
            "GET", "/api/search/nearby",
            params={"lat": lat, "lng": lng, "radius": radius, "limit": limit},
        )

    def get_location(self, location_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/locations/{location_id}")["data"]
