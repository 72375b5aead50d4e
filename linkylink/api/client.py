"""
Go-links API gateway client.

Every call goes to one base path, carries the session's bearer credential
when there is one, and is translated into records or an ApiError:

- 2xx        -> validated records (None for an empty body)
- 401        -> AuthError; the caller decides what a lost session means
- other      -> RequestError with the server's `error` text or a fallback
- transport  -> RequestError with a generic network message

No retries, no timeout, no cancellation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from linkylink.api.errors import (
    FALLBACK_MESSAGE,
    NETWORK_MESSAGE,
    AuthError,
    RequestError,
)
from linkylink.domain.entities import (
    AuthResponse,
    Credentials,
    ErrorBody,
    Link,
    LinkCreate,
    LinkUpdate,
    RoleType,
    RoleUpdate,
    UserAccount,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

CredentialSource = Callable[[], str | None]

LINK_LIST: TypeAdapter[list[Link]] = TypeAdapter(list[Link])
USER_LIST: TypeAdapter[list[UserAccount]] = TypeAdapter(list[UserAccount])
LINK: TypeAdapter[Link] = TypeAdapter(Link)
USER: TypeAdapter[UserAccount] = TypeAdapter(UserAccount)
AUTH: TypeAdapter[AuthResponse] = TypeAdapter(AuthResponse)


def _segment(value: str) -> str:
    return quote(value, safe="")


def _error_message(response: httpx.Response, default: str) -> str:
    try:
        body = ErrorBody.model_validate(response.json())
    except (ValueError, ValidationError):
        return default
    return body.error or default


class ApiClient:
    def __init__(
        self,
        base_url: str,
        credentials: CredentialSource,
        prefix: str = "/api",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") + prefix
        self._credentials = credentials
        self._http = httpx.Client(
            base_url=self.base_url,
            timeout=None,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # --- Transport ---

    def _headers(self) -> dict[str, str]:
        token = self._credentials()
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def _send(self, method: str, path: str, body: BaseModel | None = None) -> Any:
        payload = body.model_dump(by_alias=True) if body is not None else None
        try:
            response = self._http.request(
                method, path, json=payload, headers=self._headers()
            )
        except httpx.TransportError as e:
            logger.debug(f"{method} {path} failed: {e!r}")
            raise RequestError(NETWORK_MESSAGE) from e

        logger.debug(f"{method} {path} -> {response.status_code}")

        if response.status_code == 401:
            raise AuthError(_error_message(response, "Authentication required"))
        if not response.is_success:
            raise RequestError(
                _error_message(response, FALLBACK_MESSAGE), response.status_code
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RequestError(FALLBACK_MESSAGE, response.status_code) from e

    def _parse(self, adapter: TypeAdapter[T], data: Any) -> T:
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            logger.debug(f"Response failed validation: {e}")
            raise RequestError("Unexpected response from server") from e

    # --- Auth ---

    def login(self, username: str, password: str) -> AuthResponse:
        data = self._send(
            "POST", "/auth/login", Credentials(username=username, password=password)
        )
        return self._parse(AUTH, data)

    def register(self, username: str, password: str) -> AuthResponse:
        data = self._send(
            "POST", "/auth/register", Credentials(username=username, password=password)
        )
        return self._parse(AUTH, data)

    # --- Links (self-service) ---

    def list_my_links(self) -> list[Link]:
        return self._parse(LINK_LIST, self._send("GET", "/links"))

    def list_all_links(self) -> list[Link]:
        return self._parse(LINK_LIST, self._send("GET", "/links/all"))

    def create_link(self, keyword: str, url: str, description: str | None = None) -> Link:
        body = LinkCreate(keyword=keyword, url=url, description=description)
        return self._parse(LINK, self._send("POST", "/links", body))

    def update_link(self, keyword: str, url: str, description: str | None = None) -> Link:
        # The keyword is echoed in the body; the server never changes it.
        body = LinkUpdate(keyword=keyword, url=url, description=description)
        return self._parse(LINK, self._send("PUT", f"/links/{_segment(keyword)}", body))

    def delete_link(self, keyword: str) -> None:
        self._send("DELETE", f"/links/{_segment(keyword)}")

    # --- Admin ---

    def list_users(self) -> list[UserAccount]:
        return self._parse(USER_LIST, self._send("GET", "/admin/users"))

    def update_user_role(self, username: str, role: RoleType) -> UserAccount:
        data = self._send(
            "PUT", f"/admin/users/{_segment(username)}/role", RoleUpdate(role=role)
        )
        return self._parse(USER, data)

    def delete_user(self, username: str) -> None:
        self._send("DELETE", f"/admin/users/{_segment(username)}")

    def admin_list_links(self) -> list[Link]:
        return self._parse(LINK_LIST, self._send("GET", "/admin/links"))

    def admin_delete_link(self, keyword: str) -> None:
        self._send("DELETE", f"/admin/links/{_segment(keyword)}")
