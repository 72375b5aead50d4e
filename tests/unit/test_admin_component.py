from unittest.mock import Mock

import pytest

from linkylink.api.errors import AuthError, RequestError
from linkylink.components.admin import (
    ADMIN_REQUIRED,
    SELF_DELETE,
    run_admin_delete_link,
    run_change_role,
    run_delete_user,
    run_load_admin,
)
from linkylink.domain.entities import Link, UserAccount


@pytest.fixture
def mock_api():
    return Mock()


@pytest.fixture
def admin_session(session):
    session.login("t", "root", "ADMIN")
    return session


@pytest.fixture
def user_session(session):
    session.login("t", "alice", "USER")
    return session


def test_load_admin_data(mock_api, admin_session):
    users = [UserAccount(username="root", role="ADMIN"), UserAccount(username="alice", role="USER")]
    links = [Link(keyword="docs", url="https://x.example.com", ownerUsername="alice")]
    mock_api.list_users.return_value = users
    mock_api.admin_list_links.return_value = links

    result = run_load_admin(mock_api, admin_session)

    assert result.success is True
    assert result.users == users
    assert result.links == links


def test_non_admin_is_refused_before_the_network(mock_api, user_session, rules):
    assert run_load_admin(mock_api, user_session).error == ADMIN_REQUIRED
    assert run_change_role("bob", "ADMIN", mock_api, user_session).error == ADMIN_REQUIRED
    assert run_delete_user("bob", mock_api, user_session).error == ADMIN_REQUIRED
    assert run_admin_delete_link("docs", mock_api, user_session, rules).error == ADMIN_REQUIRED
    assert mock_api.mock_calls == []


def test_change_role(mock_api, admin_session):
    mock_api.update_user_role.return_value = UserAccount(username="alice", role="ADMIN")

    result = run_change_role("alice", "ADMIN", mock_api, admin_session)

    assert result.success is True
    assert result.user.role == "ADMIN"
    assert result.message == "Updated alice's role to ADMIN"
    mock_api.update_user_role.assert_called_once_with("alice", "ADMIN")


def test_self_delete_blocked_without_network(mock_api, admin_session):
    result = run_delete_user("root", mock_api, admin_session)

    assert result.success is False
    assert result.error == SELF_DELETE == "You can't delete yourself!"
    mock_api.delete_user.assert_not_called()


def test_delete_other_user(mock_api, admin_session):
    result = run_delete_user("alice", mock_api, admin_session)

    assert result.success is True
    assert result.message == 'Deleted user "alice"'
    mock_api.delete_user.assert_called_once_with("alice")


def test_delete_user_server_error(mock_api, admin_session):
    mock_api.delete_user.side_effect = RequestError("User not found", 404)

    result = run_delete_user("ghost", mock_api, admin_session)

    assert result.error == "User not found"


def test_admin_delete_link(mock_api, admin_session, rules):
    result = run_admin_delete_link("docs", mock_api, admin_session, rules)

    assert result.success is True
    assert result.message == "Deleted go/docs"
    mock_api.admin_delete_link.assert_called_once_with("docs")


def test_401_on_admin_action_logs_out(mock_api, admin_session):
    mock_api.update_user_role.side_effect = AuthError()
    seen = []
    admin_session.subscribe(seen.append)

    result = run_change_role("alice", "USER", mock_api, admin_session)

    assert result.unauthenticated is True
    assert result.error is None
    assert admin_session.is_authenticated is False
    assert len(seen) == 1


def test_401_on_both_admin_lists_logs_out_once(mock_api, admin_session):
    mock_api.list_users.side_effect = AuthError()
    mock_api.admin_list_links.side_effect = AuthError()
    seen = []
    admin_session.subscribe(seen.append)

    result = run_load_admin(mock_api, admin_session)

    assert result.unauthenticated is True
    assert len(seen) == 1


@pytest.mark.parametrize("auth_side", ["list_users", "admin_list_links"])
def test_401_on_one_admin_list_wins_over_other_failure(mock_api, admin_session, auth_side):
    mock_api.list_users.side_effect = RequestError("Forbidden", 403)
    mock_api.admin_list_links.side_effect = RequestError("Forbidden", 403)
    getattr(mock_api, auth_side).side_effect = AuthError()

    result = run_load_admin(mock_api, admin_session)

    assert result.unauthenticated is True
    assert result.error is None
    assert admin_session.is_authenticated is False
