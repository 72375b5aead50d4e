import flet as ft


class AppTheme:
    """
    Centralized theme configuration for the console.
    Dark navigation bar over a light workspace, blue actions.
    """

    font_family = "Roboto"

    # Colors - Light
    primary_light = "#0d6efd"  # Action blue
    on_primary_light = "#ffffff"
    secondary_light = "#6c757d"  # Muted gray
    surface_light = "#ffffff"
    error_light = "#dc3545"

    # Colors - Dark
    primary_dark = "#6ea8fe"
    on_primary_dark = "#0b1a33"
    secondary_dark = "#adb5bd"
    surface_dark = "#1e1e1e"

    # Status colors shared by both modes
    success = "#198754"
    warning = "#ffc107"
    navbar = "#212529"
    on_navbar = "#f8f9fa"

    @classmethod
    def light_theme(cls) -> ft.Theme:
        return ft.Theme(
            color_scheme=ft.ColorScheme(
                primary=cls.primary_light,
                on_primary=cls.on_primary_light,
                secondary=cls.secondary_light,
                surface=cls.surface_light,
                error=cls.error_light,
            ),
            font_family=cls.font_family,
            use_material3=True,
        )

    @classmethod
    def dark_theme(cls) -> ft.Theme:
        return ft.Theme(
            color_scheme=ft.ColorScheme(
                primary=cls.primary_dark,
                on_primary=cls.on_primary_dark,
                secondary=cls.secondary_dark,
                surface=cls.surface_dark,
                error=cls.error_light,
            ),
            font_family=cls.font_family,
            use_material3=True,
        )

    @classmethod
    def role_color(cls, role: str) -> str:
        return cls.warning if role == "ADMIN" else cls.secondary_light
