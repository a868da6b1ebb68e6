"""
User service for talking to the backend REST API.

Each method issues exactly one HTTP request and returns the raw
``requests.Response``. Errors are not translated: transport failures and
non-2xx statuses surface as ``requests`` exceptions.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

API_BASE_URL = "http://localhost:8080/api"
REQUEST_TIMEOUT = 10  # seconds
DEFAULT_HEADERS = {"Content-Type": "application/json"}


class UserService:
    def __init__(self, base_url: str = API_BASE_URL, timeout: float = REQUEST_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)

    def _request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                 json: Optional[Dict[str, Any]] = None) -> requests.Response:
        resp = self.session.request(
            method,
            f"{self.base_url}{path}",
            params=params,
            json=json,
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp

    def get_all_users(self) -> requests.Response:
        return self._request("GET", "/users")

    def get_user_by_id(self, user_id: str) -> requests.Response:
        return self._request("GET", f"/users/{_segment(user_id)}")

    def get_user_by_username(self, username: str) -> requests.Response:
        return self._request("GET", f"/users/username/{_segment(username)}")

    def get_user_by_email(self, email: str) -> requests.Response:
        return self._request("GET", f"/users/email/{_segment(email)}")

    def create_user(self, user_data: Dict[str, Any]) -> requests.Response:
        return self._request("POST", "/users", json=user_data)

    def update_user(self, user_id: str, user_data: Dict[str, Any]) -> requests.Response:
        return self._request("PUT", f"/users/{_segment(user_id)}", json=user_data)

    def delete_user(self, user_id: str) -> requests.Response:
        return self._request("DELETE", f"/users/{_segment(user_id)}")

    def activate_user(self, user_id: str) -> requests.Response:
        return self._request("PATCH", f"/users/{_segment(user_id)}/activate")

    def deactivate_user(self, user_id: str) -> requests.Response:
        return self._request("PATCH", f"/users/{_segment(user_id)}/deactivate")

    def search_users(self, first_name: str) -> requests.Response:
        return self._request("GET", "/users/search", params={"firstName": first_name})

    def get_user_count(self, active: bool) -> requests.Response:
        return self._request("GET", "/users/count", params={"active": "true" if active else "false"})


def _segment(value: Any) -> str:
    return quote(str(value), safe="@")
