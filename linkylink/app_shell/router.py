import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

import flet as ft

from linkylink.domain.entities import Session
from linkylink.domain.policy import is_admin
from linkylink.rules.models import Rules
from linkylink.services.session import SessionStore

logger = logging.getLogger(__name__)


class Access(Enum):
    GUEST = "guest"          # only while signed out (login, register)
    PROTECTED = "protected"  # any signed-in user
    ADMIN = "admin"          # signed-in admins


@dataclass(frozen=True)
class Paths:
    """View paths, all nested under the console's mount prefix."""

    prefix: str = "/app"

    @classmethod
    def from_rules(cls, rules: Rules) -> "Paths":
        return cls(prefix=rules.app.mount_prefix)

    @property
    def login(self) -> str:
        return f"{self.prefix}/login"

    @property
    def register(self) -> str:
        return f"{self.prefix}/register"

    @property
    def dashboard(self) -> str:
        return f"{self.prefix}/dashboard"

    @property
    def admin(self) -> str:
        return f"{self.prefix}/admin"

    @property
    def default(self) -> str:
        return self.dashboard


def resolve_redirect(access: Access | None, session: Session, paths: Paths) -> str | None:
    """
    Where a visitor must go instead of the requested view, or None to show it.

    `access` is None for a path no view is registered under.
    """
    if access is None:
        return paths.default if session.is_authenticated else paths.login

    if access is Access.GUEST:
        return paths.default if session.is_authenticated else None

    if not session.is_authenticated:
        return paths.login

    if access is Access.ADMIN and not is_admin(session.user):
        return paths.default

    return None


def normalize_route(route: str | None) -> str:
    route = (route or "/").split("?", 1)[0]
    if len(route) > 1:
        route = route.rstrip("/") or "/"
    return route


class RouteConfig(NamedTuple):
    builder: Callable[[ft.Page], ft.View]
    access: Access


class Router:
    def __init__(self, page: ft.Page, session: SessionStore, paths: Paths):
        self.page = page
        self.session = session
        self.paths = paths
        self.routes: dict[str, RouteConfig] = {}
        # Sign-in, sign-out and forced sign-out all re-run the guard.
        self._unsubscribe = session.subscribe(self._on_session_change)

    def register(
        self,
        route: str,
        builder: Callable[[ft.Page], ft.View],
        access: Access = Access.PROTECTED,
    ) -> None:
        self.routes[normalize_route(route)] = RouteConfig(builder, access)

    def handle_route_change(self, e: ft.RouteChangeEvent) -> None:
        self.render(e.route)

    def render(self, route: str | None) -> None:
        route = normalize_route(route)
        logger.info(f"Navigate to: {route}")

        config = self.routes.get(route)
        target = resolve_redirect(
            config.access if config else None, self.session.session, self.paths
        )

        if target is not None and target != route:
            logger.info(f"Access to {route} redirected to {target}")
            self.page.go(target)
            return

        self.page.views.clear()

        if config is None:
            logger.warning(f"No route found for: {route}")
            self.page.views.append(
                ft.View(route, [ft.Text(f"Page not found: {route}")])
            )
            self.page.update()
            return

        try:
            view = config.builder(self.page)
        except Exception as err:
            logger.exception(f"Error building view for {route}")
            view = ft.View(route, [ft.Text(f"Error: {err}", color="red")])

        self.page.views.append(view)
        self.page.update()

    def _on_session_change(self, _: Session) -> None:
        self.render(self.page.route)

    def view_pop(self, view: ft.View) -> None:
        self.page.views.pop()
        if self.page.views:
            self.page.go(self.page.views[-1].route)

    def close(self) -> None:
        self._unsubscribe()
