from typing import Protocol

from linkylink.domain.entities import AuthResponse, Link, RoleType, UserAccount


class GoLinksApiPort(Protocol):
    """Operations of the remote go-links service used by the console."""

    def login(self, username: str, password: str) -> AuthResponse: ...

    def register(self, username: str, password: str) -> AuthResponse: ...

    def list_my_links(self) -> list[Link]: ...

    def list_all_links(self) -> list[Link]: ...

    def create_link(self, keyword: str, url: str, description: str | None = None) -> Link: ...

    def update_link(self, keyword: str, url: str, description: str | None = None) -> Link: ...

    def delete_link(self, keyword: str) -> None: ...

    def list_users(self) -> list[UserAccount]: ...

    def update_user_role(self, username: str, role: RoleType) -> UserAccount: ...

    def delete_user(self, username: str) -> None: ...

    def admin_list_links(self) -> list[Link]: ...

    def admin_delete_link(self, keyword: str) -> None: ...
