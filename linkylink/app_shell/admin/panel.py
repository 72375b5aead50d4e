from collections.abc import Callable

import flet as ft

from linkylink.components.admin import (
    run_admin_delete_link,
    run_change_role,
    run_delete_user,
    run_load_admin,
)
from linkylink.domain.entities import ROLE_ADMIN, Link, RoleType, SessionUser, UserAccount
from linkylink.domain.policy import can_manage_account, is_self, toggled_role
from linkylink.ui.components.confirm import confirm
from linkylink.ui.components.flash import FlashBanner
from linkylink.ui.context import ServiceContext
from linkylink.ui.theme import AppTheme


def user_rows(
    users: list[UserAccount],
    actor: SessionUser | None,
    on_role_change: Callable[[str, RoleType], None],
    on_delete: Callable[[str], None],
) -> list[ft.DataRow]:
    """One row per account. The acting admin's own row is marked and has no actions."""
    rows = []
    for u in users:
        name: list[ft.Control] = [ft.Text(u.username)]
        if is_self(actor, u.username):
            name.append(ft.Text("(You)", italic=True, color="onSurfaceVariant"))

        actions: list[ft.Control] = []
        if can_manage_account(actor, u.username):
            target = toggled_role(u.role)
            actions = [
                ft.OutlinedButton(
                    "Demote to User" if u.role == ROLE_ADMIN else "Promote to Admin",
                    on_click=lambda _, username=u.username, role=target: on_role_change(username, role),
                ),
                ft.IconButton(
                    icon=ft.Icons.DELETE_OUTLINE,
                    tooltip="Delete user",
                    icon_color="red",
                    on_click=lambda _, username=u.username: on_delete(username),
                ),
            ]

        rows.append(
            ft.DataRow(
                cells=[
                    ft.DataCell(ft.Row(name, spacing=6)),
                    ft.DataCell(
                        ft.Container(
                            content=ft.Text(u.role, size=12, color="black"),
                            bgcolor=AppTheme.role_color(u.role),
                            padding=5,
                            border_radius=5,
                        )
                    ),
                    ft.DataCell(ft.Text(u.created_at.strftime("%Y-%m-%d") if u.created_at else "-")),
                    ft.DataCell(ft.Row(actions, spacing=4)),
                ]
            )
        )
    return rows


def admin_link_rows(
    links: list[Link],
    link_prefix: str,
    on_delete: Callable[[str], None],
) -> list[ft.DataRow]:
    return [
        ft.DataRow(
            cells=[
                ft.DataCell(ft.Text(f"{link_prefix}{link.keyword}", font_family="monospace")),
                ft.DataCell(
                    ft.Text(link.url, max_lines=1, overflow=ft.TextOverflow.ELLIPSIS, width=300)
                ),
                ft.DataCell(ft.Text(link.owner_username)),
                ft.DataCell(ft.Text(str(link.click_count))),
                ft.DataCell(
                    ft.IconButton(
                        icon=ft.Icons.DELETE_OUTLINE,
                        tooltip="Delete",
                        icon_color="red",
                        on_click=lambda _, keyword=link.keyword: on_delete(keyword),
                    )
                ),
            ]
        )
        for link in links
    ]


class AdminPanelView(ft.Column):  # type: ignore
    """
    Admin-only tabs: accounts (role toggle, delete) and every link (delete).
    Both lists are reloaded after each change.
    """

    def __init__(self, page: ft.Page, ctx: ServiceContext) -> None:
        super().__init__(spacing=16, expand=True)
        self.app_page = page
        self.ctx = ctx
        self.prefix = ctx.rules.app.link_prefix

        self.users: list[UserAccount] = []
        self.links: list[Link] = []

        self.flash = FlashBanner(ctx.rules.messages.success_dismiss_seconds)
        self.loading = ft.ProgressRing(visible=True)

        self.users_table = ft.DataTable(
            columns=[
                ft.DataColumn(ft.Text("Username")),
                ft.DataColumn(ft.Text("Role")),
                ft.DataColumn(ft.Text("Created")),
                ft.DataColumn(ft.Text("Actions")),
            ],
            rows=[],
        )
        self.links_table = ft.DataTable(
            columns=[
                ft.DataColumn(ft.Text("Shortcut")),
                ft.DataColumn(ft.Text("Destination")),
                ft.DataColumn(ft.Text("Owner")),
                ft.DataColumn(ft.Text("Clicks")),
                ft.DataColumn(ft.Text("Actions")),
            ],
            rows=[],
        )
        self.links_empty = ft.Text("No links yet.", color="onSurfaceVariant", visible=False)

        self.users_tab = ft.Tab(
            text="Users (0)",
            icon=ft.Icons.PEOPLE,
            content=ft.Column(
                [ft.Row([self.users_table], scroll=ft.ScrollMode.AUTO)],
                scroll=ft.ScrollMode.AUTO,
            ),
        )
        self.links_tab = ft.Tab(
            text="All Links (0)",
            icon=ft.Icons.LINK,
            content=ft.Column(
                [ft.Row([self.links_table], scroll=ft.ScrollMode.AUTO), self.links_empty],
                scroll=ft.ScrollMode.AUTO,
            ),
        )
        self.tabs = ft.Tabs(
            selected_index=0,
            tabs=[self.users_tab, self.links_tab],
            expand=True,
        )

        self.controls = [
            ft.Text("Admin Panel", size=24, weight=ft.FontWeight.BOLD),
            self.flash,
            self.loading,
            self.tabs,
        ]

    def did_mount(self) -> None:
        self.load_data()

    def _refresh(self) -> None:
        if self.page is not None:
            self.update()

    def load_data(self) -> None:
        result = run_load_admin(self.ctx.api, self.ctx.session)
        if result.unauthenticated:
            return
        self.loading.visible = False
        if not result.success:
            self.flash.show_error(result.error or "Could not load admin data")
            self._refresh()
            return

        self.users = result.users
        self.links = result.links
        self.render_tables()

    def render_tables(self) -> None:
        self.users_tab.text = f"Users ({len(self.users)})"
        self.links_tab.text = f"All Links ({len(self.links)})"
        self.users_table.rows = user_rows(
            self.users,
            self.ctx.session.user,
            on_role_change=self.change_role,
            on_delete=self.request_delete_user,
        )
        self.links_table.rows = admin_link_rows(
            self.links, self.prefix, on_delete=self.request_delete_link
        )
        self.links_table.visible = bool(self.links)
        self.links_empty.visible = not self.links
        self._refresh()

    def _finish(self, success: bool, error: str | None, message: str | None) -> None:
        if not success:
            self.flash.show_error(error or "Something went wrong")
            self._refresh()
            return
        self.flash.show_success(message or "Done")
        self.load_data()

    def change_role(self, username: str, role: RoleType) -> None:
        self.flash.clear_error()
        result = run_change_role(username, role, self.ctx.api, self.ctx.session)
        if result.unauthenticated:
            return
        self._finish(result.success, result.error, result.message)

    def request_delete_user(self, username: str) -> None:
        confirm(
            self.app_page,
            "Delete user",
            f'Delete user "{username}"? This will also delete all their links.',
            on_confirm=lambda: self.delete_user(username),
        )

    def delete_user(self, username: str) -> None:
        self.flash.clear_error()
        result = run_delete_user(username, self.ctx.api, self.ctx.session)
        if result.unauthenticated:
            return
        self._finish(result.success, result.error, result.message)

    def request_delete_link(self, keyword: str) -> None:
        confirm(
            self.app_page,
            "Delete go link",
            f"Delete {self.prefix}{keyword}? This cannot be undone.",
            on_confirm=lambda: self.delete_link(keyword),
        )

    def delete_link(self, keyword: str) -> None:
        self.flash.clear_error()
        result = run_admin_delete_link(keyword, self.ctx.api, self.ctx.session, self.ctx.rules)
        if result.unauthenticated:
            return
        self._finish(result.success, result.error, result.message)
