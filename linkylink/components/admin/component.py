"""
Admin component - user role management and global link deletion.

Shell Layer - every action first checks that the acting session is an
admin, so non-admins never reach the admin endpoints from this client.
"""

from __future__ import annotations

from linkylink.api.errors import AuthError, RequestError
from linkylink.components.common import expire_session, fetch_both
from linkylink.domain.entities import RoleType
from linkylink.domain.policy import is_self
from linkylink.ports.api import GoLinksApiPort
from linkylink.rules.models import Rules
from linkylink.services.session import SessionStore

from .models import AdminDataOutput, AdminOperationOutput

ADMIN_REQUIRED = "Admin access required"
SELF_DELETE = "You can't delete yourself!"


def run_load_admin(api: GoLinksApiPort, session: SessionStore) -> AdminDataOutput:
    if not session.is_admin():
        return AdminDataOutput(error=ADMIN_REQUIRED)

    try:
        users, links = fetch_both(api.list_users, api.admin_list_links)
    except AuthError:
        expire_session(session)
        return AdminDataOutput(unauthenticated=True)
    except RequestError as e:
        return AdminDataOutput(error=e.message)

    return AdminDataOutput(users=users, links=links, success=True)


def run_change_role(
    username: str,
    role: RoleType,
    api: GoLinksApiPort,
    session: SessionStore,
) -> AdminOperationOutput:
    if not session.is_admin():
        return AdminOperationOutput(error=ADMIN_REQUIRED)

    try:
        user = api.update_user_role(username, role)
    except AuthError:
        expire_session(session)
        return AdminOperationOutput(unauthenticated=True)
    except RequestError as e:
        return AdminOperationOutput(error=e.message)

    return AdminOperationOutput(
        success=True, user=user, message=f"Updated {username}'s role to {role}"
    )


def run_delete_user(
    username: str,
    api: GoLinksApiPort,
    session: SessionStore,
) -> AdminOperationOutput:
    """Delete an account. The acting admin's own account is refused locally."""
    if not session.is_admin():
        return AdminOperationOutput(error=ADMIN_REQUIRED)
    if is_self(session.user, username):
        return AdminOperationOutput(error=SELF_DELETE)

    try:
        api.delete_user(username)
    except AuthError:
        expire_session(session)
        return AdminOperationOutput(unauthenticated=True)
    except RequestError as e:
        return AdminOperationOutput(error=e.message)

    return AdminOperationOutput(success=True, message=f'Deleted user "{username}"')


def run_admin_delete_link(
    keyword: str,
    api: GoLinksApiPort,
    session: SessionStore,
    rules: Rules,
) -> AdminOperationOutput:
    if not session.is_admin():
        return AdminOperationOutput(error=ADMIN_REQUIRED)

    try:
        api.admin_delete_link(keyword)
    except AuthError:
        expire_session(session)
        return AdminOperationOutput(unauthenticated=True)
    except RequestError as e:
        return AdminOperationOutput(error=e.message)

    return AdminOperationOutput(
        success=True, message=f"Deleted {rules.app.link_prefix}{keyword}"
    )
