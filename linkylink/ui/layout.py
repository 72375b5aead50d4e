from collections.abc import Callable
from typing import Any, NamedTuple

import flet as ft

from linkylink.app_shell.router import Paths
from linkylink.services.session import SessionStore
from linkylink.ui.theme import AppTheme


class NavItem(NamedTuple):
    label: str
    route: str
    icon: str
    selected_icon: str


def nav_items(session: SessionStore, paths: Paths) -> list[NavItem]:
    """Destinations of the navigation bar for the current session."""
    if not session.is_authenticated:
        return [
            NavItem("Login", paths.login, ft.Icons.LOGIN, ft.Icons.LOGIN),
            NavItem("Register", paths.register, ft.Icons.PERSON_ADD_OUTLINED, ft.Icons.PERSON_ADD),
        ]
    items = [
        NavItem("Dashboard", paths.dashboard, ft.Icons.GRID_VIEW_OUTLINED, ft.Icons.GRID_VIEW),
    ]
    if session.is_admin():
        items.append(
            NavItem("Admin", paths.admin, ft.Icons.ADMIN_PANEL_SETTINGS_OUTLINED, ft.Icons.ADMIN_PANEL_SETTINGS)
        )
    return items


class MainLayout(ft.Row):  # type: ignore
    """
    The persistent shell around every view.
    - NavigationRail (Left): destinations for the current session
    - Top bar: brand, theme toggle, signed-in user, logout
    """
    def __init__(
        self,
        page: ft.Page,
        session: SessionStore,
        paths: Paths,
        content: ft.Control,
        on_logout: Callable[[], None],
        on_nav: Callable[[str], None],
        toggle_theme: Callable[[], None],
        current_route: str,
        brand: str = "LinkyLink",
    ):
        super().__init__(expand=True, spacing=0)
        self.session = session
        self.on_logout = on_logout
        self.on_nav = on_nav
        self.toggle_theme = toggle_theme
        self.items = nav_items(session, paths)

        routes = [item.route for item in self.items]
        selected = routes.index(current_route) if current_route in routes else None

        self.rail = ft.NavigationRail(
            selected_index=selected,
            label_type=ft.NavigationRailLabelType.ALL,
            min_width=100,
            leading=ft.Container(
                content=ft.Icon(ft.Icons.LINK, size=32, color="primary"),
                padding=20,
            ),
            group_alignment=-0.9,
            destinations=[
                ft.NavigationRailDestination(
                    icon=item.icon,
                    selected_icon=item.selected_icon,
                    label=item.label,
                )
                for item in self.items
            ],
            on_change=self._rail_change,
        )

        self.content_area = ft.Container(
            content=content,
            expand=True,
            padding=20,
            alignment=ft.alignment.top_left,
        )

        self.app_bar = ft.Container(
            content=ft.Row(
                [
                    ft.Row(
                        [
                            ft.Icon(ft.Icons.LINK, color=AppTheme.on_navbar),
                            ft.Text(
                                brand,
                                size=20,
                                weight=ft.FontWeight.BOLD,
                                color=AppTheme.on_navbar,
                            ),
                        ]
                    ),
                    ft.Container(expand=True),
                    ft.IconButton(
                        ft.Icons.DARK_MODE if page.theme_mode == ft.ThemeMode.LIGHT else ft.Icons.LIGHT_MODE,
                        icon_color=AppTheme.on_navbar,
                        on_click=lambda _: self.toggle_theme(),
                    ),
                    *self._account_controls(),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            padding=ft.padding.symmetric(horizontal=20, vertical=10),
            bgcolor=AppTheme.navbar,
        )

        right_panel = ft.Column(
            [
                self.app_bar,
                ft.Container(content=self.content_area, expand=True),
            ],
            expand=True,
            spacing=0,
            scroll=ft.ScrollMode.AUTO,
        )

        self.controls = [
            self.rail,
            ft.VerticalDivider(width=1),
            right_panel,
        ]

    def _account_controls(self) -> list[ft.Control]:
        user = self.session.user
        if user is None:
            return []

        label: list[ft.Control] = [
            ft.Icon(ft.Icons.ACCOUNT_CIRCLE, color=AppTheme.on_navbar),
            ft.Text(user.username, color=AppTheme.on_navbar),
        ]
        if self.session.is_admin():
            label.append(
                ft.Container(
                    content=ft.Text("Admin", size=12, color="black"),
                    bgcolor=AppTheme.warning,
                    padding=ft.padding.symmetric(horizontal=6, vertical=2),
                    border_radius=4,
                )
            )
        return [
            ft.Row(label, spacing=6),
            ft.TextButton(
                "Logout",
                icon=ft.Icons.LOGOUT,
                style=ft.ButtonStyle(color=AppTheme.on_navbar),
                on_click=lambda _: self.on_logout(),
            ),
        ]

    def _rail_change(self, e: Any) -> None:
        idx = e.control.selected_index
        if idx is not None and 0 <= idx < len(self.items):
            self.on_nav(self.items[idx].route)
