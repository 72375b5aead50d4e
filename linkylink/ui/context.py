from __future__ import annotations

from dataclasses import dataclass

import httpx

from linkylink.api.client import ApiClient
from linkylink.app_shell.router import Paths
from linkylink.ports.storage import ClientStoragePort
from linkylink.rules.models import Rules
from linkylink.services.session import SessionStore


@dataclass
class ServiceContext:
    """Everything a view needs, handed to each view explicitly."""

    api: ApiClient
    session: SessionStore
    rules: Rules
    paths: Paths

    @classmethod
    def create(
        cls,
        api_url: str,
        rules: Rules,
        storage: ClientStoragePort,
        transport: httpx.BaseTransport | None = None,
    ) -> ServiceContext:
        session = SessionStore(storage, rules.storage)
        # The client reads the credential on every call, so it follows
        # sign-in and sign-out without being rebuilt.
        api = ApiClient(
            api_url,
            credentials=lambda: session.credential,
            prefix=rules.api.prefix,
            transport=transport,
        )
        return cls(api=api, session=session, rules=rules, paths=Paths.from_rules(rules))

    def close(self) -> None:
        self.api.close()
