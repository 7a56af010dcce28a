import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import get_settings

logger = logging.getLogger(__name__)

_client = None


class BackendError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthError(BackendError):
    pass


class SessionExpiredError(AuthError):
    """The access token was rejected and the session could not be refreshed."""


def _error_message(res: httpx.Response) -> str:
    try:
        body = res.json()
    except ValueError:
        return res.text or res.reason_phrase
    if isinstance(body, dict):
        for key in ("message", "msg", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return res.text or res.reason_phrase


class SupabaseClient:
    """
    Thin client over the Supabase HTTP API: PostgREST tables under
    ``/rest/v1`` and GoTrue auth under ``/auth/v1``.

    Every request carries the project's anon key; table requests made on
    behalf of a signed-in user also send the user's access token so that
    row level security applies.
    """

    def __init__(self, url: str, api_key: str, timeout: float = 10.0, transport=None):
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.http = httpx.Client(base_url=self.url, timeout=timeout, transport=transport)

    # -----------------------------
    # HTTP helpers
    # -----------------------------
    def _headers(self, access_token: Optional[str] = None, extra: Optional[Dict[str, str]] = None):
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {access_token or self.api_key}",
            "Content-Type": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    def _request(self, method: str, path: str, error_cls=BackendError, **kwargs) -> Any:
        try:
            res = self.http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise error_cls(f"Could not reach backend: {e}") from e

        logger.debug("%s %s -> %s", method, path, res.status_code)
        if res.is_error:
            message = _error_message(res)
            logger.error("%s %s returned %s: %s", method, path, res.status_code, message)
            raise error_cls(message, res.status_code)

        if res.status_code == 204 or not res.content:
            return None
        return res.json()

    # -----------------------------
    # Tables
    # -----------------------------
    def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None,
        access_token: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params = {"select": columns}
        for column, value in (filters or {}).items():
            params[column] = f"eq.{value}"
        rows = self._request("GET", f"/rest/v1/{table}", params=params,
                             headers=self._headers(access_token))
        return rows or []

    def insert(
        self,
        table: str,
        rows: List[Dict[str, Any]],
        access_token: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        created = self._request(
            "POST", f"/rest/v1/{table}", json=rows,
            headers=self._headers(access_token, {"Prefer": "return=representation"}),
        )
        return created or []

    # -----------------------------
    # Auth
    # -----------------------------
    def sign_up(self, email: str, password: str, redirect_to: Optional[str] = None) -> Dict[str, Any]:
        params = {"redirect_to": redirect_to} if redirect_to else None
        return self._request("POST", "/auth/v1/signup", AuthError, params=params,
                             json={"email": email, "password": password},
                             headers=self._headers()) or {}

    def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/v1/token", AuthError,
                             params={"grant_type": "password"},
                             json={"email": email, "password": password},
                             headers=self._headers()) or {}

    def refresh_session(self, refresh_token: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/v1/token", AuthError,
                             params={"grant_type": "refresh_token"},
                             json={"refresh_token": refresh_token},
                             headers=self._headers()) or {}

    def sign_out(self, access_token: str) -> None:
        self._request("POST", "/auth/v1/logout", AuthError, headers=self._headers(access_token))


def get_client() -> SupabaseClient:
    global _client
    if _client is None:
        settings = get_settings().require_backend()
        _client = SupabaseClient(
            settings.supabase_url,
            settings.supabase_anon_key,
            timeout=settings.request_timeout,
        )
    return _client
