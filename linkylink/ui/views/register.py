import flet as ft

from linkylink.components.auth import RegisterInput, run_register
from linkylink.ui.context import ServiceContext


class RegisterView(ft.Column):  # type: ignore
    def __init__(self, page: ft.Page, ctx: ServiceContext) -> None:
        super().__init__()
        self.app_page = page
        self.ctx = ctx
        bounds = ctx.rules.validation

        self.username = ft.TextField(
            label="Username",
            width=320,
            autofocus=True,
            max_length=bounds.username.max,
            helper_text=f"{bounds.username.min}-{bounds.username.max} characters",
        )
        self.password = ft.TextField(
            label="Password",
            width=320,
            password=True,
            can_reveal_password=True,
            helper_text=f"At least {bounds.password.min} characters",
        )
        self.confirm_password = ft.TextField(
            label="Confirm Password",
            width=320,
            password=True,
            on_submit=self.register_click,
        )
        self.error_text = ft.Text(color="red", visible=False)
        self.submit = ft.ElevatedButton(
            "Create Account",
            icon=ft.Icons.PERSON_ADD,
            width=320,
            on_click=self.register_click,
        )

        self.alignment = ft.MainAxisAlignment.CENTER
        self.horizontal_alignment = ft.CrossAxisAlignment.CENTER
        self.controls = [
            ft.Text(ctx.rules.app.name, style=ft.TextThemeStyle.HEADLINE_MEDIUM),
            ft.Text("Create your account", color="onSurfaceVariant"),
            ft.Container(
                content=ft.Row(
                    [
                        ft.Icon(ft.Icons.INFO_OUTLINE, size=16),
                        ft.Text(
                            "The first user to register automatically becomes the Admin.",
                            size=12,
                        ),
                    ],
                    tight=True,
                ),
                bgcolor="#cff4fc",
                padding=10,
                border_radius=6,
                width=320,
            ),
            self.username,
            self.password,
            self.confirm_password,
            self.error_text,
            self.submit,
            ft.Row(
                [
                    ft.Text("Already have an account?"),
                    ft.TextButton(
                        "Sign in",
                        on_click=lambda _: self.app_page.go(self.ctx.paths.login),
                    ),
                ],
                alignment=ft.MainAxisAlignment.CENTER,
            ),
        ]

    def _refresh(self) -> None:
        if self.page is not None:
            self.update()

    def register_click(self, e: ft.ControlEvent | None = None) -> None:
        self.error_text.visible = False
        self.submit.disabled = True
        self._refresh()

        result = run_register(
            RegisterInput(
                username=self.username.value or "",
                password=self.password.value or "",
                confirm_password=self.confirm_password.value or "",
            ),
            self.ctx.api,
            self.ctx.session,
            self.ctx.rules.validation,
        )
        if result.success:
            return

        self.error_text.value = result.error or "Registration failed"
        self.error_text.visible = True
        self.submit.disabled = False
        self._refresh()
