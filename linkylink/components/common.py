"""
Shared pieces of the view-logic components.

Each component action returns an output dataclass instead of raising, so a
view only has to render `error`/`message` and react to `unauthenticated`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import TypeVar

from linkylink.api.errors import AuthError
from linkylink.services.session import SessionStore

logger = logging.getLogger(__name__)

A = TypeVar("A")
B = TypeVar("B")


@dataclass
class ActionOutput:
    """Result of a single mutation."""

    success: bool = False
    error: str | None = None
    message: str | None = None
    unauthenticated: bool = False


def fetch_both(first: Callable[[], A], second: Callable[[], B]) -> tuple[A, B]:
    """
    Run two independent fetches at the same time and wait for both.

    If either side was rejected with AuthError, that error is raised ahead of
    any other failure.
    """
    with ThreadPoolExecutor(max_workers=2) as pool:
        first_future = pool.submit(first)
        second_future = pool.submit(second)
        wait([first_future, second_future])

    errors = [f.exception() for f in (first_future, second_future)]
    for err in errors:
        if isinstance(err, AuthError):
            raise err
    for err in errors:
        if err is not None:
            raise err
    return first_future.result(), second_future.result()


def expire_session(session: SessionStore) -> None:
    """The server rejected the credential: drop the local session."""
    if session.logout():
        logger.info("Credential rejected by the server; session cleared")
