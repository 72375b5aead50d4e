"""
Links component - go-link self-service for the dashboard.
"""

from ._impl import normalize_keyword, validate_keyword, validate_link_form
from .component import run_delete_link, run_load_links, run_save_link
from .models import LinkFormInput, LinkListsOutput, LinkOperationOutput

__all__ = [
    # Entry points
    "run_load_links",
    "run_save_link",
    "run_delete_link",
    # Form rules
    "normalize_keyword",
    "validate_keyword",
    "validate_link_form",
    # Models
    "LinkFormInput",
    "LinkListsOutput",
    "LinkOperationOutput",
]
