from linkylink.domain.entities import ROLE_ADMIN, ROLE_USER, Link, RoleType, SessionUser


def is_admin(user: SessionUser | None) -> bool:
    return user is not None and user.role == ROLE_ADMIN


def can_modify_link(user: SessionUser | None, link: Link) -> bool:
    """
    Edit/delete controls on a link row.

    Owners manage their own links; admins manage every link.
    """
    if user is None:
        return False
    return link.owner_username == user.username or is_admin(user)


def is_self(actor: SessionUser | None, username: str) -> bool:
    return actor is not None and actor.username == username


def can_manage_account(actor: SessionUser | None, username: str) -> bool:
    """Role toggle and delete on a user row: admins only, never on their own row."""
    return is_admin(actor) and not is_self(actor, username)


def toggled_role(role: RoleType) -> RoleType:
    return ROLE_USER if role == ROLE_ADMIN else ROLE_ADMIN
