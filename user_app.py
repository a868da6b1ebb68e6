"""
User management app: owns the view state and coordinates the form with the API client.

Every mutation is followed by a full refetch of the user list; nothing is
updated optimistically.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from api_client import UserService
from user_form import UserForm

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch users"
CREATE_FAILED = "Failed to create user"
DELETE_FAILED = "Failed to delete user"


@dataclass
class AppState:
    users: List[Dict[str, Any]] = field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None
    show_form: bool = False


class UserApp:
    def __init__(self, service: Optional[UserService] = None):
        self.service = service or UserService()
        self.state = AppState()

    def fetch_users(self) -> None:
        """Replace the user list with a fresh copy from the API."""
        self.state.loading = True
        self.state.error = None
        try:
            response = self.service.get_all_users()
            self.state.users = response.json()
        except (requests.RequestException, ValueError):
            self.state.error = FETCH_FAILED
            logger.exception("Error fetching users")
        finally:
            self.state.loading = False

    def create_user(self, user_data: Dict[str, Any]) -> None:
        try:
            self.service.create_user(user_data)
        except requests.RequestException:
            self.state.error = CREATE_FAILED
            logger.exception("Error creating user")
            return
        self.state.show_form = False
        self.fetch_users()

    def delete_user(self, user_id: str) -> None:
        try:
            self.service.delete_user(user_id)
        except requests.RequestException:
            self.state.error = DELETE_FAILED
            logger.exception("Error deleting user")
            return
        self.fetch_users()

    def toggle_form(self) -> bool:
        self.state.show_form = not self.state.show_form
        return self.state.show_form

    def new_form(self) -> UserForm:
        return UserForm(on_submit=self.create_user)
