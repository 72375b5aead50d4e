"""
Go-link form rules.

Functional Core - pure functions, no I/O.
"""

from __future__ import annotations

import re

from linkylink.rules.models import ValidationRules

from .models import LinkFormInput


def normalize_keyword(raw: str) -> str:
    """Keywords are typed freely and stored lowercase."""
    return raw.strip().lower()


def validate_keyword(keyword: str, rules: ValidationRules) -> str | None:
    bounds = rules.keyword
    if not bounds.min <= len(keyword) <= bounds.max:
        return f"Keyword must be {bounds.min}-{bounds.max} characters"
    if keyword in rules.reserved_keywords:
        return f"'{keyword}' is a reserved keyword"
    if not re.match(bounds.pattern, keyword):
        return "Keyword can only contain lowercase letters, numbers, and hyphens"
    return None


def validate_link_form(input_data: LinkFormInput, rules: ValidationRules) -> str | None:
    # The keyword is fixed once created, so edits skip its checks.
    if input_data.editing is None:
        error = validate_keyword(normalize_keyword(input_data.keyword), rules)
        if error:
            return error

    if not input_data.url.strip():
        return "URL is required"

    if len(input_data.description) > rules.description.max:
        return f"Description must be under {rules.description.max} characters"

    return None


def clean_description(description: str) -> str | None:
    description = description.strip()
    return description or None
