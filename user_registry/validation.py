"""Field format checks for registration submissions.

The predicates are pure: they take a string (None is treated as empty) and
return a bool. `validate_registration` applies them in a fixed order and
raises on the first failure so the rejection message is deterministic.
"""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional

from user_registry.errors import UserValidationError

if TYPE_CHECKING:  # import for type checking only
    from user_registry.models.user_models import RegistrationRequest

_ALPHA_RE = re.compile(r"[A-Za-z ]+")
_MOBILE_RE = re.compile(r"[0-9]{10}")
_LOGIN_ID_RE = re.compile(r"[A-Za-z0-9]{8}")
_PASSWORD_RE = re.compile(r"(?=.*[a-z])(?=.*[A-Z])(?=.*\W).{6,}")
_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

ADDRESS_FIELDS = ("street", "city", "state", "country")


def is_alphabetic(value: Optional[str]) -> bool:
    """Letters and spaces only, at least one character"""
    return _ALPHA_RE.fullmatch(value or "") is not None


def is_mobile_number(value: Optional[str]) -> bool:
    """Exactly 10 decimal digits"""
    return _MOBILE_RE.fullmatch(value or "") is not None


def is_login_id(value: Optional[str]) -> bool:
    """Exactly 8 alphanumeric characters"""
    return _LOGIN_ID_RE.fullmatch(value or "") is not None


def is_strong_password(value: Optional[str]) -> bool:
    """At least 6 characters with a lowercase letter, an uppercase letter and a symbol"""
    return _PASSWORD_RE.fullmatch(value or "") is not None


def is_email(value: Optional[str]) -> bool:
    """local@domain.tld with no whitespace and a single @"""
    return _EMAIL_RE.fullmatch(value or "") is not None


def validate_registration(payload: RegistrationRequest) -> None:
    """
    Check a registration body, raising UserValidationError on the first
    failing rule.

    Order: required names, name charset, mobile, email, address parts
    (only those present), login id, password.
    """
    if not payload.firstName or not payload.lastName:
        missing = "firstName" if not payload.firstName else "lastName"
        raise UserValidationError("First name and last name are required", field=missing)

    if not is_alphabetic(payload.firstName):
        raise UserValidationError("First name must contain only letters", field="firstName")
    if not is_alphabetic(payload.lastName):
        raise UserValidationError("Last name must contain only letters", field="lastName")

    if not is_mobile_number(payload.mobileNo):
        raise UserValidationError("Mobile number must be exactly 10 digits", field="mobileNo")

    if not is_email(payload.emailId):
        raise UserValidationError("Invalid email address", field="emailId")

    if payload.address is not None:
        for name in ADDRESS_FIELDS:
            value = getattr(payload.address, name)
            if value and not is_alphabetic(value):
                raise UserValidationError(f"Address {name} must contain only letters", field=f"address.{name}")

    if not is_login_id(payload.loginId):
        raise UserValidationError("Login ID must be exactly 8 alphanumeric characters", field="loginId")

    if not is_strong_password(payload.password):
        raise UserValidationError(
            "Password must be at least 6 characters and include an uppercase letter, "
            "a lowercase letter and a symbol",
            field="password",
        )
