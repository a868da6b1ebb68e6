"""
User form: collects the fields for a new user and validates them on submit.

Validation only runs when the form is submitted; a failing rule blocks the
submission and fills ``errors`` with a message per field.
"""

import logging
import re
from typing import Any, Callable, Dict

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")
USERNAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100


class UserFormData(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    username: str = ""
    email: str = ""
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")

    def to_payload(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


# form input name -> model attribute
FIELD_NAMES = {
    "username": "username",
    "email": "email",
    "firstName": "first_name",
    "lastName": "last_name",
}


def validate_user_form(data: UserFormData) -> Dict[str, str]:
    """Return a map of input name -> error message; empty when the form is valid."""
    errors: Dict[str, str] = {}

    if not data.username.strip():
        errors["username"] = "Username is required"
    elif len(data.username) < USERNAME_MIN_LENGTH:
        errors["username"] = f"Username must be at least {USERNAME_MIN_LENGTH} characters"

    if not data.email.strip():
        errors["email"] = "Email is required"
    elif not EMAIL_RE.search(data.email):
        errors["email"] = "Email is invalid"

    if data.first_name and len(data.first_name) > NAME_MAX_LENGTH:
        errors["firstName"] = f"First name must not exceed {NAME_MAX_LENGTH} characters"

    if data.last_name and len(data.last_name) > NAME_MAX_LENGTH:
        errors["lastName"] = f"Last name must not exceed {NAME_MAX_LENGTH} characters"

    return errors


class UserForm:
    """Form state for creating a user.

    ``on_submit`` receives the camelCase payload. If it returns, the fields
    are cleared. If it raises, the error is logged and the fields are kept;
    the caller is not told beyond the ``False`` return of ``submit``.
    """

    def __init__(self, on_submit: Callable[[Dict[str, str]], Any]):
        self.on_submit = on_submit
        self.data = UserFormData()
        self.errors: Dict[str, str] = {}
        self.is_submitting = False

    def change(self, name: str, value: str) -> None:
        if name not in FIELD_NAMES:
            raise KeyError(f"Unknown form field: {name}")
        setattr(self.data, FIELD_NAMES[name], value)
        # Clear error when user starts typing
        if self.errors.get(name):
            self.errors[name] = ""

    def validate(self) -> bool:
        self.errors = validate_user_form(self.data)
        return not self.errors

    def reset(self) -> None:
        self.data = UserFormData()

    def submit(self) -> bool:
        if not self.validate():
            return False

        self.is_submitting = True
        try:
            self.on_submit(self.data.to_payload())
        except Exception:
            logger.exception("Error submitting form")
            return False
        finally:
            self.is_submitting = False

        self.reset()
        return True
