from collections.abc import Callable

import flet as ft

from linkylink.components.links import (
    LinkFormInput,
    run_delete_link,
    run_load_links,
    run_save_link,
)
from linkylink.domain.entities import Link, SessionUser
from linkylink.domain.policy import can_modify_link
from linkylink.ui.components.confirm import confirm
from linkylink.ui.components.flash import FlashBanner
from linkylink.ui.context import ServiceContext


def link_columns(show_owner: bool) -> list[ft.DataColumn]:
    labels = ["Shortcut", "Destination", "Description"]
    if show_owner:
        labels.append("Owner")
    labels += ["Clicks", "Actions"]
    return [ft.DataColumn(ft.Text(label)) for label in labels]


def link_rows(
    links: list[Link],
    viewer: SessionUser | None,
    show_owner: bool,
    link_prefix: str,
    on_edit: Callable[[Link], None],
    on_delete: Callable[[str], None],
) -> list[ft.DataRow]:
    """Table rows; edit/delete only on rows the viewer owns, or on all for admins."""
    rows = []
    for link in links:
        actions: list[ft.Control] = []
        if can_modify_link(viewer, link):
            actions = [
                ft.IconButton(
                    icon=ft.Icons.EDIT,
                    tooltip="Edit",
                    on_click=lambda _, current=link: on_edit(current),
                ),
                ft.IconButton(
                    icon=ft.Icons.DELETE_OUTLINE,
                    tooltip="Delete",
                    icon_color="red",
                    on_click=lambda _, keyword=link.keyword: on_delete(keyword),
                ),
            ]

        cells = [
            ft.DataCell(ft.Text(f"{link_prefix}{link.keyword}", font_family="monospace")),
            ft.DataCell(
                ft.Text(
                    spans=[ft.TextSpan(link.url, url=link.url)],
                    max_lines=1,
                    overflow=ft.TextOverflow.ELLIPSIS,
                    width=300,
                )
            ),
            ft.DataCell(ft.Text(link.description or "-", color="onSurfaceVariant")),
        ]
        if show_owner:
            cells.append(ft.DataCell(ft.Text(link.owner_username)))
        cells += [
            ft.DataCell(ft.Text(str(link.click_count))),
            ft.DataCell(ft.Row(actions, spacing=0)),
        ]
        rows.append(ft.DataRow(cells=cells))
    return rows


class DashboardView(ft.Column):  # type: ignore
    """
    Go-link self-service: "mine"/"all" lists, one create/edit form,
    owner-or-admin row actions. Every mutation reloads both lists.
    """

    def __init__(self, page: ft.Page, ctx: ServiceContext) -> None:
        super().__init__(spacing=16, expand=True)
        self.app_page = page
        self.ctx = ctx
        self.prefix = ctx.rules.app.link_prefix

        self.my_links: list[Link] = []
        self.all_links: list[Link] = []
        self.show_all = False
        self.editing: str | None = None

        self.flash = FlashBanner(ctx.rules.messages.success_dismiss_seconds)
        self.loading = ft.ProgressRing(visible=True)

        # Header
        self.title = ft.Text("My Go Links", size=24, weight=ft.FontWeight.BOLD)
        self.mine_button = ft.OutlinedButton("Mine (0)", on_click=lambda _: self.set_show_all(False))
        self.all_button = ft.OutlinedButton("All (0)", on_click=lambda _: self.set_show_all(True))
        header = ft.Row(
            [
                self.title,
                ft.Row(
                    [
                        self.mine_button,
                        self.all_button,
                        ft.FilledButton(
                            "New Link", icon=ft.Icons.ADD, on_click=lambda _: self.open_create_form()
                        ),
                    ]
                ),
            ],
            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            wrap=True,
        )

        # Create/Edit form
        self.form_title = ft.Text("Create New Go Link", size=18, weight=ft.FontWeight.BOLD)
        self.keyword_field = ft.TextField(
            label="Keyword",
            prefix_text=self.prefix,
            hint_text="google",
            width=220,
            on_change=self._lowercase_keyword,
        )
        self.url_field = ft.TextField(
            label="URL", hint_text="https://www.google.com", expand=True
        )
        self.description_field = ft.TextField(
            label="Description (optional)", hint_text="Google search engine", expand=True
        )
        self.submit_button = ft.FilledButton("Create", on_click=self.submit_form)
        self.form = ft.Container(
            content=ft.Column(
                [
                    self.form_title,
                    ft.Row(
                        [self.keyword_field, self.url_field, self.description_field],
                        wrap=True,
                    ),
                    ft.Row(
                        [
                            self.submit_button,
                            ft.OutlinedButton("Cancel", on_click=lambda _: self.close_form()),
                        ]
                    ),
                ]
            ),
            padding=20,
            border=ft.border.all(1, "primary"),
            border_radius=8,
            visible=False,
        )

        # Table / empty state
        self.table = ft.DataTable(columns=link_columns(False), rows=[])
        self.empty_text = ft.Text(color="onSurfaceVariant")
        self.empty_state = ft.Column(
            [
                ft.Icon(ft.Icons.LINK, size=48, color="onSurfaceVariant"),
                self.empty_text,
                ft.FilledButton(
                    "Create your first go link", on_click=lambda _: self.open_create_form()
                ),
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            visible=False,
        )

        self.controls = [
            header,
            self.flash,
            self.form,
            self.loading,
            ft.Row([self.table], scroll=ft.ScrollMode.AUTO),
            self.empty_state,
        ]

    def did_mount(self) -> None:
        self.load_links()

    def _refresh(self) -> None:
        if self.page is not None:
            self.update()

    # --- Data ---

    def load_links(self) -> None:
        result = run_load_links(self.ctx.api, self.ctx.session)
        if result.unauthenticated:
            return
        self.loading.visible = False
        if not result.success:
            self.flash.show_error(result.error or "Could not load links")
            self._refresh()
            return

        self.my_links = result.mine
        self.all_links = result.all
        self.render_table()

    @property
    def displayed_links(self) -> list[Link]:
        return self.all_links if self.show_all else self.my_links

    def render_table(self) -> None:
        self.title.value = "All Go Links" if self.show_all else "My Go Links"
        self.mine_button.text = f"Mine ({len(self.my_links)})"
        self.all_button.text = f"All ({len(self.all_links)})"

        links = self.displayed_links
        self.table.columns = link_columns(self.show_all)
        self.table.rows = link_rows(
            links,
            self.ctx.session.user,
            self.show_all,
            self.prefix,
            on_edit=self.open_edit_form,
            on_delete=self.request_delete,
        )
        self.table.visible = bool(links)
        self.empty_state.visible = not links
        self.empty_text.value = (
            "No go links yet." if self.show_all else "You haven't created any go links yet."
        )
        self._refresh()

    def set_show_all(self, show_all: bool) -> None:
        self.show_all = show_all
        self.render_table()

    # --- Form ---

    def _lowercase_keyword(self, e: ft.ControlEvent) -> None:
        lowered = (self.keyword_field.value or "").lower()
        if lowered != self.keyword_field.value:
            self.keyword_field.value = lowered
            self._refresh()

    def open_create_form(self) -> None:
        self.editing = None
        self.form_title.value = "Create New Go Link"
        self.keyword_field.value = ""
        self.keyword_field.disabled = False
        self.url_field.value = ""
        self.description_field.value = ""
        self.submit_button.text = "Create"
        self.form.visible = True
        self.flash.clear_error()
        self._refresh()

    def open_edit_form(self, link: Link) -> None:
        self.editing = link.keyword
        self.form_title.value = f"Edit {self.prefix}{link.keyword}"
        self.keyword_field.value = link.keyword
        self.keyword_field.disabled = True
        self.url_field.value = link.url
        self.description_field.value = link.description or ""
        self.submit_button.text = "Update"
        self.form.visible = True
        self.flash.clear_error()
        self._refresh()

    def close_form(self) -> None:
        self.form.visible = False
        self._refresh()

    def submit_form(self, e: ft.ControlEvent | None = None) -> None:
        self.flash.clear_error()
        self.submit_button.disabled = True
        self._refresh()

        result = run_save_link(
            LinkFormInput(
                keyword=self.keyword_field.value or "",
                url=self.url_field.value or "",
                description=self.description_field.value or "",
                editing=self.editing,
            ),
            self.ctx.api,
            self.ctx.session,
            self.ctx.rules,
        )
        if result.unauthenticated:
            return

        self.submit_button.disabled = False
        if not result.success:
            self.flash.show_error(result.error or "Could not save link")
            self._refresh()
            return

        self.form.visible = False
        self.flash.show_success(result.message or "Saved")
        self.load_links()

    # --- Delete ---

    def request_delete(self, keyword: str) -> None:
        confirm(
            self.app_page,
            "Delete go link",
            f"Delete {self.prefix}{keyword}? This cannot be undone.",
            on_confirm=lambda: self.delete_link(keyword),
        )

    def delete_link(self, keyword: str) -> None:
        self.flash.clear_error()
        result = run_delete_link(keyword, self.ctx.api, self.ctx.session, self.ctx.rules)
        if result.unauthenticated:
            return
        if not result.success:
            self.flash.show_error(result.error or "Could not delete link")
            self._refresh()
            return

        self.flash.show_success(result.message or "Deleted")
        self.load_links()
