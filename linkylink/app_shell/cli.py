import argparse
import getpass
import logging
import sys
from collections.abc import Callable, Sequence
from typing import NoReturn

from linkylink.adapters.local_storage import JsonFileClientStorage
from linkylink.app_shell.config import ConfigError, Settings, load_settings
from linkylink.components.admin import (
    SELF_DELETE,
    AdminDataOutput,
    run_admin_delete_link,
    run_change_role,
    run_delete_user,
    run_load_admin,
)
from linkylink.components.auth import LoginInput, RegisterInput, run_login, run_register
from linkylink.components.links import (
    LinkFormInput,
    run_delete_link,
    run_load_links,
    run_save_link,
)
from linkylink.domain.entities import ROLE_ADMIN, ROLE_USER, Link
from linkylink.domain.policy import is_self
from linkylink.rules.loader import load_rules
from linkylink.ui.context import ServiceContext

logger = logging.getLogger("cli")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SESSION_EXPIRED = "Session expired or not signed in. Run 'linkylink-cli login' first."


def get_context(settings: Settings) -> ServiceContext:
    rules = load_rules(settings.rules_path)
    storage = JsonFileClientStorage(settings.state_path)
    return ServiceContext.create(settings.api_url, rules, storage)


def fail(message: str) -> NoReturn:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def require_session(ctx: ServiceContext) -> None:
    if not ctx.session.is_authenticated:
        fail(SESSION_EXPIRED)


def confirm_action(
    prompt: str, assume_yes: bool, ask: Callable[[str], str] | None = None
) -> bool:
    if assume_yes:
        return True
    return (ask or input)(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")


def print_table(headers: list[str], rows: list[list[str]]) -> None:
    widths = [len(h) for h in headers]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row, strict=True)]
    print("  ".join(h.ljust(w) for h, w in zip(headers, widths, strict=True)))
    print("  ".join("-" * w for w in widths))
    for row in rows:
        print("  ".join(cell.ljust(w) for cell, w in zip(row, widths, strict=True)))


def print_links(links: list[Link], prefix: str, show_owner: bool) -> None:
    if not links:
        print("No go links yet.")
        return
    headers = ["Shortcut", "Destination", "Description"]
    if show_owner:
        headers.append("Owner")
    headers.append("Clicks")

    rows = []
    for link in links:
        row = [f"{prefix}{link.keyword}", link.url, link.description or "-"]
        if show_owner:
            row.append(link.owner_username)
        row.append(str(link.click_count))
        rows.append(row)
    print_table(headers, rows)


# --- Auth ---


def handle_login(ctx: ServiceContext, args: argparse.Namespace) -> None:
    password = args.password if args.password is not None else getpass.getpass("Password: ")
    result = run_login(LoginInput(args.username, password), ctx.api, ctx.session)
    if not result.success or result.user is None:
        fail(result.error or "Login failed")
    print(f"Signed in as {result.user.username} ({result.user.role})")


def handle_register(ctx: ServiceContext, args: argparse.Namespace) -> None:
    password = args.password if args.password is not None else getpass.getpass("Password: ")
    confirm = password if args.password is not None else getpass.getpass("Confirm password: ")
    result = run_register(
        RegisterInput(args.username, password, confirm),
        ctx.api,
        ctx.session,
        ctx.rules.validation,
    )
    if not result.success or result.user is None:
        fail(result.error or "Registration failed")
    print(f"Registered and signed in as {result.user.username} ({result.user.role})")


def handle_logout(ctx: ServiceContext, args: argparse.Namespace) -> None:
    if ctx.session.logout():
        print("Signed out.")
    else:
        print("Not signed in.")


def handle_whoami(ctx: ServiceContext, args: argparse.Namespace) -> None:
    user = ctx.session.user
    if user is None:
        print("Not signed in.")
        return
    print(f"{user.username} ({user.role})")


# --- Links ---


def handle_links_list(ctx: ServiceContext, args: argparse.Namespace) -> None:
    require_session(ctx)
    result = run_load_links(ctx.api, ctx.session)
    if result.unauthenticated:
        fail(SESSION_EXPIRED)
    if not result.success:
        fail(result.error or "Could not load links")
    links = result.all if args.all else result.mine
    print_links(links, ctx.rules.app.link_prefix, show_owner=args.all)


def handle_links_save(ctx: ServiceContext, args: argparse.Namespace) -> None:
    require_session(ctx)
    editing = args.keyword if args.links_command == "update" else None
    result = run_save_link(
        LinkFormInput(
            keyword=args.keyword,
            url=args.url,
            description=args.description or "",
            editing=editing,
        ),
        ctx.api,
        ctx.session,
        ctx.rules,
    )
    if result.unauthenticated:
        fail(SESSION_EXPIRED)
    if not result.success:
        fail(result.error or "Could not save link")
    print(result.message)


def handle_links_delete(ctx: ServiceContext, args: argparse.Namespace) -> None:
    require_session(ctx)
    prefix = ctx.rules.app.link_prefix
    if not confirm_action(f"Delete {prefix}{args.keyword}?", args.yes):
        print("Cancelled.")
        return
    result = run_delete_link(args.keyword, ctx.api, ctx.session, ctx.rules)
    if result.unauthenticated:
        fail(SESSION_EXPIRED)
    if not result.success:
        fail(result.error or "Could not delete link")
    print(result.message)


# --- Admin ---


def _load_admin(ctx: ServiceContext) -> AdminDataOutput:
    require_session(ctx)
    result = run_load_admin(ctx.api, ctx.session)
    if result.unauthenticated:
        fail(SESSION_EXPIRED)
    if not result.success:
        fail(result.error or "Could not load admin data")
    return result


def handle_users_list(ctx: ServiceContext, args: argparse.Namespace) -> None:
    result = _load_admin(ctx)
    actor = ctx.session.user
    rows = [
        [
            u.username + (" (you)" if is_self(actor, u.username) else ""),
            u.role,
            u.created_at.strftime("%Y-%m-%d") if u.created_at else "-",
        ]
        for u in result.users
    ]
    print_table(["Username", "Role", "Created"], rows)


def handle_users_role(ctx: ServiceContext, args: argparse.Namespace) -> None:
    require_session(ctx)
    result = run_change_role(args.username, args.role, ctx.api, ctx.session)
    if result.unauthenticated:
        fail(SESSION_EXPIRED)
    if not result.success:
        fail(result.error or "Could not change role")
    print(result.message)


def handle_users_delete(ctx: ServiceContext, args: argparse.Namespace) -> None:
    require_session(ctx)
    # Refused before the confirmation prompt.
    if is_self(ctx.session.user, args.username):
        fail(SELF_DELETE)
    if not confirm_action(
        f'Delete user "{args.username}" and all their links?', args.yes
    ):
        print("Cancelled.")
        return
    result = run_delete_user(args.username, ctx.api, ctx.session)
    if result.unauthenticated:
        fail(SESSION_EXPIRED)
    if not result.success:
        fail(result.error or "Could not delete user")
    print(result.message)


def handle_admin_links_list(ctx: ServiceContext, args: argparse.Namespace) -> None:
    result = _load_admin(ctx)
    print_links(result.links, ctx.rules.app.link_prefix, show_owner=True)


def handle_admin_links_delete(ctx: ServiceContext, args: argparse.Namespace) -> None:
    require_session(ctx)
    prefix = ctx.rules.app.link_prefix
    if not confirm_action(f"Delete {prefix}{args.keyword}?", args.yes):
        print("Cancelled.")
        return
    result = run_admin_delete_link(args.keyword, ctx.api, ctx.session, ctx.rules)
    if result.unauthenticated:
        fail(SESSION_EXPIRED)
    if not result.success:
        fail(result.error or "Could not delete link")
    print(result.message)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LinkyLink go-links CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # login / register
    login_parser = subparsers.add_parser("login", help="Sign in")
    login_parser.add_argument("username")
    login_parser.add_argument("--password", help="Prompted for when omitted")
    login_parser.set_defaults(handler=handle_login)

    register_parser = subparsers.add_parser("register", help="Create an account and sign in")
    register_parser.add_argument("username")
    register_parser.add_argument("--password", help="Prompted for (twice) when omitted")
    register_parser.set_defaults(handler=handle_register)

    subparsers.add_parser("logout", help="Forget the stored session").set_defaults(
        handler=handle_logout
    )
    subparsers.add_parser("whoami", help="Show the signed-in user").set_defaults(
        handler=handle_whoami
    )

    # links
    links_parser = subparsers.add_parser("links", help="Manage your go links")
    links_sub = links_parser.add_subparsers(dest="links_command", required=True)

    list_parser = links_sub.add_parser("list", help="List your links")
    list_parser.add_argument("--all", action="store_true", help="List every user's links")
    list_parser.set_defaults(handler=handle_links_list)

    for name, help_text in (("create", "Create a link"), ("update", "Change a link's URL")):
        save_parser = links_sub.add_parser(name, help=help_text)
        save_parser.add_argument("keyword")
        save_parser.add_argument("url")
        save_parser.add_argument("--description", default="")
        save_parser.set_defaults(handler=handle_links_save)

    delete_parser = links_sub.add_parser("delete", help="Delete a link")
    delete_parser.add_argument("keyword")
    delete_parser.add_argument("--yes", action="store_true", help="Skip confirmation")
    delete_parser.set_defaults(handler=handle_links_delete)

    # users (admin)
    users_parser = subparsers.add_parser("users", help="Manage accounts (admin)")
    users_sub = users_parser.add_subparsers(dest="users_command", required=True)

    users_sub.add_parser("list", help="List accounts").set_defaults(handler=handle_users_list)

    role_parser = users_sub.add_parser("role", help="Set an account's role")
    role_parser.add_argument("username")
    role_parser.add_argument("role", choices=[ROLE_USER, ROLE_ADMIN])
    role_parser.set_defaults(handler=handle_users_role)

    user_delete_parser = users_sub.add_parser("delete", help="Delete an account")
    user_delete_parser.add_argument("username")
    user_delete_parser.add_argument("--yes", action="store_true", help="Skip confirmation")
    user_delete_parser.set_defaults(handler=handle_users_delete)

    # admin-links
    admin_links_parser = subparsers.add_parser("admin-links", help="Manage every link (admin)")
    admin_links_sub = admin_links_parser.add_subparsers(dest="admin_links_command", required=True)

    admin_links_sub.add_parser("list", help="List every link").set_defaults(
        handler=handle_admin_links_list
    )

    admin_delete_parser = admin_links_sub.add_parser("delete", help="Delete any link")
    admin_delete_parser.add_argument("keyword")
    admin_delete_parser.add_argument("--yes", action="store_true", help="Skip confirmation")
    admin_delete_parser.set_defaults(handler=handle_admin_links_delete)

    return parser


def dispatch(ctx: ServiceContext, args: argparse.Namespace) -> None:
    args.handler(ctx, args)


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except ConfigError as e:
        fail(str(e))

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    try:
        ctx = get_context(settings)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Could not load rules: {e}")
        fail(str(e))

    try:
        dispatch(ctx, args)
    finally:
        ctx.close()


if __name__ == "__main__":
    main()
