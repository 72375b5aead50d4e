import threading
from collections.abc import Callable
from typing import Any

import flet as ft

from linkylink.ui.theme import AppTheme

TimerFactory = Callable[[float, Callable[[], None]], Any]


def _alert(text: ft.Text, bgcolor: str) -> ft.Container:
    return ft.Container(
        content=text,
        bgcolor=bgcolor,
        padding=ft.padding.symmetric(horizontal=16, vertical=12),
        border_radius=ft.border_radius.all(6),
        visible=False,
    )


class FlashBanner(ft.Column):  # type: ignore
    """
    Inline error and success messages of a view.

    Errors stay until the view clears them on its next action; a success
    message dismisses itself after `dismiss_seconds`.
    """

    def __init__(
        self,
        dismiss_seconds: float = 3,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        super().__init__(spacing=8)
        self.dismiss_seconds = dismiss_seconds
        self._timer_factory = timer_factory
        self._timer: Any = None

        self.error_text = ft.Text(color=AppTheme.error_light)
        self.success_text = ft.Text(color=AppTheme.success)
        self._error_box = _alert(self.error_text, "#f8d7da")
        self._success_box = _alert(self.success_text, "#d1e7dd")
        self.controls = [self._error_box, self._success_box]

    @property
    def error(self) -> str | None:
        return self.error_text.value if self._error_box.visible else None

    @property
    def success(self) -> str | None:
        return self.success_text.value if self._success_box.visible else None

    def show_error(self, message: str) -> None:
        self.error_text.value = message
        self._error_box.visible = True
        self._refresh()

    def clear_error(self) -> None:
        self._error_box.visible = False
        self.error_text.value = None
        self._refresh()

    def show_success(self, message: str) -> None:
        self._cancel_timer()
        self.success_text.value = message
        self._success_box.visible = True
        self._refresh()

        self._timer = self._timer_factory(self.dismiss_seconds, self.clear_success)
        if hasattr(self._timer, "daemon"):
            self._timer.daemon = True
        self._timer.start()

    def clear_success(self) -> None:
        self._timer = None
        self._success_box.visible = False
        self.success_text.value = None
        self._refresh()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _refresh(self) -> None:
        if self.page is not None:
            self.update()

    def will_unmount(self) -> None:
        self._cancel_timer()
