from collections.abc import Callable

import flet as ft

from linkylink.ui.theme import AppTheme


def confirm(
    page: ft.Page,
    title: str,
    message: str,
    on_confirm: Callable[[], None],
    confirm_label: str = "Delete",
) -> ft.AlertDialog:
    """Ask before a destructive action; `on_confirm` runs only on acceptance."""

    def cancel(_: ft.ControlEvent) -> None:
        page.close(dialog)

    def accept(_: ft.ControlEvent) -> None:
        page.close(dialog)
        on_confirm()

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text(title),
        content=ft.Text(message),
        actions=[
            ft.TextButton("Cancel", on_click=cancel),
            ft.FilledButton(
                confirm_label,
                on_click=accept,
                style=ft.ButtonStyle(bgcolor=AppTheme.error_light, color="white"),
            ),
        ],
        actions_alignment=ft.MainAxisAlignment.END,
    )
    page.open(dialog)
    return dialog
