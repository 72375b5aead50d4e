"""
Links component - the dashboard's go-link self-service.

Shell Layer - calls the API, converts failures into outputs, and drops the
session when the server rejects the credential.
"""

from __future__ import annotations

from linkylink.api.errors import AuthError, RequestError
from linkylink.components.common import expire_session, fetch_both
from linkylink.ports.api import GoLinksApiPort
from linkylink.rules.models import Rules
from linkylink.services.session import SessionStore

from ._impl import clean_description, normalize_keyword, validate_link_form
from .models import LinkFormInput, LinkListsOutput, LinkOperationOutput


def run_load_links(api: GoLinksApiPort, session: SessionStore) -> LinkListsOutput:
    """Fetch "my links" and "all links" together; both are always loaded."""
    try:
        mine, everything = fetch_both(api.list_my_links, api.list_all_links)
    except AuthError:
        expire_session(session)
        return LinkListsOutput(unauthenticated=True)
    except RequestError as e:
        return LinkListsOutput(error=e.message)

    return LinkListsOutput(mine=mine, all=everything, success=True)


def run_save_link(
    input_data: LinkFormInput,
    api: GoLinksApiPort,
    session: SessionStore,
    rules: Rules,
) -> LinkOperationOutput:
    """Create a link, or update url/description of the one being edited."""
    error = validate_link_form(input_data, rules.validation)
    if error:
        return LinkOperationOutput(error=error)

    prefix = rules.app.link_prefix
    url = input_data.url.strip()
    description = clean_description(input_data.description)

    try:
        if input_data.editing is not None:
            link = api.update_link(input_data.editing, url, description)
            message = f"Updated {prefix}{input_data.editing}"
        else:
            keyword = normalize_keyword(input_data.keyword)
            link = api.create_link(keyword, url, description)
            message = f"Created {prefix}{keyword}"
    except AuthError:
        expire_session(session)
        return LinkOperationOutput(unauthenticated=True)
    except RequestError as e:
        return LinkOperationOutput(error=e.message)

    return LinkOperationOutput(success=True, link=link, message=message)


def run_delete_link(
    keyword: str,
    api: GoLinksApiPort,
    session: SessionStore,
    rules: Rules,
) -> LinkOperationOutput:
    try:
        api.delete_link(keyword)
    except AuthError:
        expire_session(session)
        return LinkOperationOutput(unauthenticated=True)
    except RequestError as e:
        return LinkOperationOutput(error=e.message)

    return LinkOperationOutput(success=True, message=f"Deleted {rules.app.link_prefix}{keyword}")
