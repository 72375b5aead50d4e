import logging

import flet as ft

from linkylink.adapters.flet_storage import FletClientStorage
from linkylink.app_shell.admin.panel import AdminPanelView
from linkylink.app_shell.config import ConfigError, Settings, load_settings
from linkylink.app_shell.router import Access, Router
from linkylink.rules.loader import load_rules
from linkylink.ui.context import ServiceContext
from linkylink.ui.layout import MainLayout
from linkylink.ui.theme import AppTheme
from linkylink.ui.views.dashboard import DashboardView
from linkylink.ui.views.login import LoginView
from linkylink.ui.views.register import RegisterView

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main(page: ft.Page) -> None:
    page.title = "LinkyLink"

    # 0. Theme Setup
    page.theme = AppTheme.light_theme()
    page.dark_theme = AppTheme.dark_theme()
    page.theme_mode = ft.ThemeMode.LIGHT

    # 1. Settings and Rules
    try:
        settings = load_settings()
        rules = load_rules(settings.rules_path)
    except (ConfigError, FileNotFoundError, ValueError) as e:
        logger.error(f"Startup failed: {e}")
        page.add(ft.Text(f"Error: {e}", color="red", size=20))
        return

    logger.info(f"Rules loaded; API at {settings.api_url}")
    page.title = rules.app.name

    # 2. Create Context (session rehydrates from the browser's storage)
    ctx = ServiceContext.create(settings.api_url, rules, FletClientStorage(page))
    paths = ctx.paths

    # 3. Routing Setup
    router = Router(page, ctx.session, paths)

    # --- Layout Wrapper ---
    def make_view(route: str, content: ft.Control) -> ft.View:
        def handle_logout() -> None:
            # The router's session subscription moves the page to login.
            ctx.session.logout()

        def toggle_theme() -> None:
            if page.theme_mode == ft.ThemeMode.LIGHT:
                page.theme_mode = ft.ThemeMode.DARK
            else:
                page.theme_mode = ft.ThemeMode.LIGHT
            page.update()

        layout = MainLayout(
            page=page,
            session=ctx.session,
            paths=paths,
            content=content,
            on_logout=handle_logout,
            on_nav=page.go,
            toggle_theme=toggle_theme,
            current_route=route,
            brand=rules.app.name,
        )
        return ft.View(route, [layout], padding=0)

    # --- Builders ---

    def login_builder(_: ft.Page) -> ft.View:
        return make_view(paths.login, LoginView(page, ctx))

    def register_builder(_: ft.Page) -> ft.View:
        return make_view(paths.register, RegisterView(page, ctx))

    def dashboard_builder(_: ft.Page) -> ft.View:
        return make_view(paths.dashboard, DashboardView(page, ctx))

    def admin_builder(_: ft.Page) -> ft.View:
        return make_view(paths.admin, AdminPanelView(page, ctx))

    # --- Register Routes ---
    router.register(paths.login, login_builder, access=Access.GUEST)
    router.register(paths.register, register_builder, access=Access.GUEST)
    router.register(paths.dashboard, dashboard_builder, access=Access.PROTECTED)
    router.register(paths.admin, admin_builder, access=Access.ADMIN)

    def handle_close(_: ft.ControlEvent) -> None:
        router.close()
        ctx.close()

    # Wire up events
    page.on_route_change = router.handle_route_change
    page.on_view_pop = router.view_pop
    page.on_close = handle_close

    # Unmatched paths (including "/") are sent to login or the dashboard.
    page.go(page.route or paths.default)


def app_view(settings: Settings) -> ft.AppView:
    return ft.AppView.WEB_BROWSER if settings.view == "web" else ft.AppView.FLET_APP


def run() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    ft.app(target=main, view=app_view(settings), port=settings.port)


if __name__ == "__main__":
    run()
