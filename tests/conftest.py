import itertools
import json
import re
from datetime import UTC, datetime
from pathlib import Path

import httpx
import pytest

from linkylink.adapters.local_storage import MemoryClientStorage
from linkylink.api.client import ApiClient
from linkylink.rules.loader import load_rules
from linkylink.services.session import SessionStore
from linkylink.ui.context import ServiceContext

RULES_FILE = Path(__file__).parent.parent / "linkylink" / "rules" / "rules.yaml"
API_ORIGIN = "http://golinks.test"


def _error(status: int, message: str) -> httpx.Response:
    return httpx.Response(status, json={"error": message})


class FakeGoLinksServer:
    """
    In-memory go-links backend behind httpx.MockTransport.

    Mirrors the server's rules the console depends on: first account is
    ADMIN, links are owned, admin endpoints need the ADMIN role, and any
    missing or unknown bearer token answers 401.
    """

    def __init__(self) -> None:
        self.users: dict[str, dict] = {}
        self.tokens: dict[str, str] = {}
        self.links: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []
        self._ids = itertools.count(1)

    # --- Test helpers ---

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def add_user(self, username: str, password: str = "secret1", role: str | None = None) -> str:
        """Create an account directly and return a valid token for it."""
        if role is None:
            role = "ADMIN" if not self.users else "USER"
        self.users[username] = {
            "password": password,
            "role": role,
            "createdAt": datetime(2026, 1, 1, tzinfo=UTC).isoformat(),
        }
        return self._issue(username)

    def add_link(self, keyword: str, owner: str, url: str = "https://example.com", clicks: int = 0) -> None:
        self.links[keyword] = {
            "keyword": keyword,
            "url": url,
            "description": None,
            "ownerUsername": owner,
            "clickCount": clicks,
            "createdAt": datetime(2026, 1, 2, tzinfo=UTC).isoformat(),
        }

    def revoke_all_tokens(self) -> None:
        self.tokens.clear()

    def paths(self) -> list[str]:
        return [f"{r.method} {r.url.path}" for r in self.requests]

    # --- Dispatch ---

    def _issue(self, username: str) -> str:
        token = f"token-{next(self._ids)}"
        self.tokens[token] = username
        return token

    def _auth_response(self, username: str) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "token": self._issue(username),
                "username": username,
                "role": self.users[username]["role"],
            },
        )

    def _caller(self, request: httpx.Request) -> str | None:
        header = request.headers.get("Authorization", "")
        if not header.startswith("Bearer "):
            return None
        username = self.tokens.get(header[len("Bearer "):])
        return username if username in self.users else None

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        body = json.loads(request.content) if request.content else {}

        if request.method == "POST" and path == "/auth/register":
            return self._register(body)
        if request.method == "POST" and path == "/auth/login":
            return self._login(body)

        caller = self._caller(request)
        if caller is None:
            return _error(401, "Unauthorized")

        if path.startswith("/admin/"):
            if self.users[caller]["role"] != "ADMIN":
                return _error(403, "Admin access required")
            return self._admin(request.method, path, body)
        return self._links(request.method, path, body, caller)

    def _register(self, body: dict) -> httpx.Response:
        username = body.get("username", "")
        if username in self.users:
            return _error(400, "Username already exists")
        self.add_user(username, body.get("password", ""))
        return self._auth_response(username)

    def _login(self, body: dict) -> httpx.Response:
        user = self.users.get(body.get("username", ""))
        if user is None or user["password"] != body.get("password"):
            return _error(401, "Invalid username or password")
        return self._auth_response(body["username"])

    def _links(self, method: str, path: str, body: dict, caller: str) -> httpx.Response:
        if path == "/links" and method == "GET":
            mine = [link for link in self.links.values() if link["ownerUsername"] == caller]
            return httpx.Response(200, json=mine)
        if path == "/links/all" and method == "GET":
            return httpx.Response(200, json=list(self.links.values()))
        if path == "/links" and method == "POST":
            keyword = body["keyword"]
            if keyword in self.links:
                return _error(400, "Keyword already exists")
            self.add_link(keyword, caller, body["url"])
            self.links[keyword]["description"] = body.get("description")
            return httpx.Response(200, json=self.links[keyword])

        match = re.fullmatch(r"/links/([^/]+)", path)
        if match is None:
            return _error(404, "Not found")
        link = self.links.get(match.group(1))
        if link is None:
            return _error(404, "Link not found")
        if link["ownerUsername"] != caller and self.users[caller]["role"] != "ADMIN":
            return _error(403, "You can only modify your own links")
        if method == "PUT":
            link["url"] = body["url"]
            link["description"] = body.get("description")
            return httpx.Response(200, json=link)
        if method == "DELETE":
            del self.links[link["keyword"]]
            return httpx.Response(200, json={"message": "Link deleted"})
        return _error(405, "Method not allowed")

    def _admin(self, method: str, path: str, body: dict) -> httpx.Response:
        if path == "/admin/users" and method == "GET":
            return httpx.Response(
                200,
                json=[
                    {"username": name, "role": u["role"], "createdAt": u["createdAt"]}
                    for name, u in self.users.items()
                ],
            )
        if path == "/admin/links" and method == "GET":
            return httpx.Response(200, json=list(self.links.values()))

        role_match = re.fullmatch(r"/admin/users/([^/]+)/role", path)
        if role_match and method == "PUT":
            username = role_match.group(1)
            if username not in self.users:
                return _error(404, "User not found")
            self.users[username]["role"] = body["role"]
            return httpx.Response(200, json={"username": username, "role": body["role"]})

        user_match = re.fullmatch(r"/admin/users/([^/]+)", path)
        if user_match and method == "DELETE":
            username = user_match.group(1)
            if username not in self.users:
                return _error(404, "User not found")
            del self.users[username]
            self.links = {k: v for k, v in self.links.items() if v["ownerUsername"] != username}
            return httpx.Response(200, json={"message": "User deleted"})

        link_match = re.fullmatch(r"/admin/links/([^/]+)", path)
        if link_match and method == "DELETE":
            if self.links.pop(link_match.group(1), None) is None:
                return _error(404, "Link not found")
            return httpx.Response(200, json={"message": "Link deleted"})

        return _error(404, "Not found")


@pytest.fixture
def rules():
    """REAL rules shipped with the package."""
    return load_rules(RULES_FILE)


@pytest.fixture
def storage():
    return MemoryClientStorage()


@pytest.fixture
def session(storage, rules):
    return SessionStore(storage, rules.storage)


@pytest.fixture
def server():
    return FakeGoLinksServer()


@pytest.fixture
def api(server, session, rules):
    client = ApiClient(
        API_ORIGIN,
        credentials=lambda: session.credential,
        prefix=rules.api.prefix,
        transport=server.transport(),
    )
    yield client
    client.close()


@pytest.fixture
def ctx(server, storage, rules):
    """
    A full ServiceContext wired to the in-memory server.
    """
    context = ServiceContext.create(API_ORIGIN, rules, storage, transport=server.transport())
    yield context
    context.close()
