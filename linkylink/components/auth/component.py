"""
Auth component - sign in and registration.

Shell Layer - calls the API and hands the issued credential to the session
store. The router notices the new session and moves on to the dashboard.
"""

from __future__ import annotations

from linkylink.api.errors import ApiError
from linkylink.domain.entities import AuthResponse
from linkylink.ports.api import GoLinksApiPort
from linkylink.rules.models import ValidationRules
from linkylink.services.session import SessionStore

from ._impl import validate_login, validate_registration
from .models import AuthOutput, LoginInput, RegisterInput


def _start_session(response: AuthResponse, session: SessionStore) -> AuthOutput:
    started = session.login(response.token, response.username, response.role)
    return AuthOutput(user=started.user, success=True)


def run_login(
    input_data: LoginInput,
    api: GoLinksApiPort,
    session: SessionStore,
) -> AuthOutput:
    error = validate_login(input_data)
    if error:
        return AuthOutput(error=error)

    try:
        response = api.login(input_data.username.strip(), input_data.password)
    except ApiError as e:
        # A 401 here means bad credentials, not a lost session.
        return AuthOutput(error=e.message)

    return _start_session(response, session)


def run_register(
    input_data: RegisterInput,
    api: GoLinksApiPort,
    session: SessionStore,
    rules: ValidationRules,
) -> AuthOutput:
    error = validate_registration(input_data, rules)
    if error:
        return AuthOutput(error=error)

    try:
        response = api.register(input_data.username.strip(), input_data.password)
    except ApiError as e:
        return AuthOutput(error=e.message)

    return _start_session(response, session)
