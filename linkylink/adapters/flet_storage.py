import flet as ft


class FletClientStorage:
    """
    ClientStoragePort over Flet's client storage.

    In the browser this is the page's localStorage, so the session survives
    reloads; the desktop client persists it in the user's profile.
    """

    def __init__(self, page: ft.Page) -> None:
        self.page = page

    def get(self, key: str) -> str | None:
        value = self.page.client_storage.get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        self.page.client_storage.set(key, value)

    def remove(self, key: str) -> None:
        if self.page.client_storage.contains_key(key):
            self.page.client_storage.remove(key)
