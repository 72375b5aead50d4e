import json

import httpx
import pytest

from linkylink.api.client import ApiClient
from linkylink.api.errors import FALLBACK_MESSAGE, NETWORK_MESSAGE, AuthError, RequestError


class Recorder:
    """MockTransport handler answering every request with one canned response."""

    def __init__(self, response: httpx.Response | Exception) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def make_client(handler, token: str | None = None) -> ApiClient:
    return ApiClient(
        "http://golinks.test/",
        credentials=lambda: token,
        transport=httpx.MockTransport(handler),
    )


LINK_JSON = {
    "keyword": "docs",
    "url": "https://docs.example.com",
    "description": None,
    "ownerUsername": "alice",
    "clickCount": 7,
    "createdAt": "2026-01-02T10:00:00",
}


def test_attaches_bearer_credential():
    handler = Recorder(httpx.Response(200, json=[]))
    make_client(handler, token="abc").list_my_links()

    assert handler.last.headers["Authorization"] == "Bearer abc"
    assert handler.last.url == "http://golinks.test/api/links"


def test_no_authorization_header_without_credential():
    handler = Recorder(httpx.Response(200, json=[]))
    make_client(handler).list_all_links()

    assert "Authorization" not in handler.last.headers
    assert handler.last.url.path == "/api/links/all"


def test_credential_is_read_per_request():
    tokens = iter(["first", "second"])
    handler = Recorder(httpx.Response(200, json=[]))
    client = ApiClient(
        "http://golinks.test",
        credentials=lambda: next(tokens),
        transport=httpx.MockTransport(handler),
    )

    client.list_my_links()
    client.list_my_links()

    assert [r.headers["Authorization"] for r in handler.requests] == [
        "Bearer first",
        "Bearer second",
    ]


def test_login_posts_credentials_and_parses_response():
    handler = Recorder(httpx.Response(200, json={"token": "t", "username": "alice", "role": "USER"}))

    result = make_client(handler).login("alice", "secret1")

    assert handler.last.method == "POST"
    assert handler.last.url.path == "/api/auth/login"
    assert handler.last.headers["Content-Type"] == "application/json"
    assert json.loads(handler.last.content) == {"username": "alice", "password": "secret1"}
    assert result.token == "t"
    assert result.role == "USER"


def test_links_parse_camel_case_fields():
    handler = Recorder(httpx.Response(200, json=[LINK_JSON]))

    (link,) = make_client(handler, "t").list_my_links()

    assert link.owner_username == "alice"
    assert link.click_count == 7
    assert link.description is None


def test_create_link_sends_wire_names():
    handler = Recorder(httpx.Response(200, json=LINK_JSON))

    make_client(handler, "t").create_link("docs", "https://docs.example.com", "Team docs")

    assert handler.last.method == "POST"
    assert json.loads(handler.last.content) == {
        "keyword": "docs",
        "url": "https://docs.example.com",
        "description": "Team docs",
    }


def test_update_link_puts_to_keyword_path():
    handler = Recorder(httpx.Response(200, json=LINK_JSON))

    make_client(handler, "t").update_link("docs", "https://new.example.com")

    assert handler.last.method == "PUT"
    assert handler.last.url.path == "/api/links/docs"
    assert json.loads(handler.last.content)["url"] == "https://new.example.com"


def test_path_segments_are_encoded():
    handler = Recorder(httpx.Response(200, json={"message": "ok"}))

    make_client(handler, "t").delete_user("a/b c")

    assert handler.last.url.raw_path == b"/api/admin/users/a%2Fb%20c"


def test_role_update_response_without_created_at():
    handler = Recorder(httpx.Response(200, json={"username": "bob", "role": "ADMIN"}))

    user = make_client(handler, "t").update_user_role("bob", "ADMIN")

    assert handler.last.url.path == "/api/admin/users/bob/role"
    assert json.loads(handler.last.content) == {"role": "ADMIN"}
    assert user.role == "ADMIN"
    assert user.created_at is None


@pytest.mark.parametrize(
    "call, method, path",
    [
        (lambda c: c.delete_link("docs"), "DELETE", "/api/links/docs"),
        (lambda c: c.admin_delete_link("docs"), "DELETE", "/api/admin/links/docs"),
        (lambda c: c.delete_user("bob"), "DELETE", "/api/admin/users/bob"),
    ],
)
def test_deletes_return_none(call, method, path):
    handler = Recorder(httpx.Response(200, json={"message": "deleted"}))
    client = make_client(handler, "t")

    assert call(client) is None
    assert (handler.last.method, handler.last.url.path) == (method, path)


def test_empty_body_is_none():
    handler = Recorder(httpx.Response(204))

    assert make_client(handler, "t").delete_link("docs") is None


def test_401_raises_auth_error():
    handler = Recorder(httpx.Response(401, json={"error": "Token expired"}))

    with pytest.raises(AuthError) as exc:
        make_client(handler, "t").list_my_links()

    assert exc.value.status_code == 401
    assert exc.value.message == "Token expired"


def test_401_without_body_has_default_message():
    handler = Recorder(httpx.Response(401))

    with pytest.raises(AuthError) as exc:
        make_client(handler, "t").list_users()

    assert exc.value.message == "Authentication required"


def test_server_error_message_is_verbatim():
    handler = Recorder(httpx.Response(400, json={"error": "Keyword already exists"}))

    with pytest.raises(RequestError) as exc:
        make_client(handler, "t").create_link("docs", "https://x.example.com")

    assert exc.value.message == "Keyword already exists"
    assert exc.value.status_code == 400


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500),
        httpx.Response(500, text="<html>oops</html>"),
        httpx.Response(403, json={"detail": "nope"}),
    ],
)
def test_missing_error_text_falls_back(response):
    with pytest.raises(RequestError) as exc:
        make_client(Recorder(response), "t").list_all_links()

    assert exc.value.message == FALLBACK_MESSAGE


def test_transport_failure_is_request_error():
    handler = Recorder(httpx.ConnectError("connection refused"))

    with pytest.raises(RequestError) as exc:
        make_client(handler, "t").list_my_links()

    assert exc.value.message == NETWORK_MESSAGE
    assert exc.value.status_code is None


def test_unexpected_payload_is_request_error():
    handler = Recorder(httpx.Response(200, json={"not": "a list"}))

    with pytest.raises(RequestError):
        make_client(handler, "t").list_my_links()


def test_auth_error_is_not_a_request_error():
    assert not issubclass(AuthError, RequestError)
