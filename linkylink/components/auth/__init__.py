"""
Auth component - sign in and registration.
"""

from ._impl import validate_login, validate_registration
from .component import run_login, run_register
from .models import AuthOutput, LoginInput, RegisterInput

__all__ = [
    # Entry points
    "run_login",
    "run_register",
    # Pre-checks
    "validate_login",
    "validate_registration",
    # Models
    "LoginInput",
    "RegisterInput",
    "AuthOutput",
]
