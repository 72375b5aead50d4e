"""
Client-side pre-checks for the sign-in forms.

Functional Core - pure functions, no I/O. The server repeats every check.
"""

from __future__ import annotations

from linkylink.rules.models import ValidationRules

from .models import LoginInput, RegisterInput


def validate_login(input_data: LoginInput) -> str | None:
    if not input_data.username.strip() or not input_data.password:
        return "Please enter username and password."
    return None


def validate_registration(input_data: RegisterInput, rules: ValidationRules) -> str | None:
    """
    Return the first failing check, in the order the form reports them:
    confirmation, password length, username length.
    """
    if input_data.password != input_data.confirm_password:
        return "Passwords do not match"

    password = rules.password
    if len(input_data.password) < password.min:
        return f"Password must be at least {password.min} characters"
    if len(input_data.password) > password.max:
        return f"Password must be at most {password.max} characters"

    username = rules.username
    if not username.min <= len(input_data.username.strip()) <= username.max:
        return f"Username must be {username.min}-{username.max} characters"

    return None
