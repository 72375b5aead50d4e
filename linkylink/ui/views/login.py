import flet as ft

from linkylink.components.auth import LoginInput, run_login
from linkylink.ui.context import ServiceContext


class LoginView(ft.Column):  # type: ignore
    def __init__(self, page: ft.Page, ctx: ServiceContext) -> None:
        super().__init__()
        self.app_page = page
        self.ctx = ctx

        self.username = ft.TextField(label="Username", width=320, autofocus=True)
        self.password = ft.TextField(
            label="Password",
            width=320,
            password=True,
            can_reveal_password=True,
            on_submit=self.login_click,
        )
        self.error_text = ft.Text(color="red", visible=False)
        self.submit = ft.ElevatedButton(
            "Sign In", icon=ft.Icons.LOGIN, width=320, on_click=self.login_click
        )

        self.alignment = ft.MainAxisAlignment.CENTER
        self.horizontal_alignment = ft.CrossAxisAlignment.CENTER
        self.controls = [
            ft.Text(ctx.rules.app.name, style=ft.TextThemeStyle.HEADLINE_MEDIUM),
            ft.Text("Sign in to your account", color="onSurfaceVariant"),
            self.username,
            self.password,
            self.error_text,
            self.submit,
            ft.Row(
                [
                    ft.Text("Don't have an account?"),
                    ft.TextButton(
                        "Register here",
                        on_click=lambda _: self.app_page.go(self.ctx.paths.register),
                    ),
                ],
                alignment=ft.MainAxisAlignment.CENTER,
            ),
        ]

    def _refresh(self) -> None:
        if self.page is not None:
            self.update()

    def _show_error(self, message: str) -> None:
        self.error_text.value = message
        self.error_text.visible = True

    def login_click(self, e: ft.ControlEvent | None = None) -> None:
        self.error_text.visible = False
        self.submit.disabled = True
        self._refresh()

        # On success the router sees the new session and leaves this view.
        result = run_login(
            LoginInput(
                username=self.username.value or "",
                password=self.password.value or "",
            ),
            self.ctx.api,
            self.ctx.session,
        )
        if result.success:
            return

        self._show_error(result.error or "Sign in failed")
        self.submit.disabled = False
        self._refresh()
