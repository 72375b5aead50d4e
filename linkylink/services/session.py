import logging
from collections.abc import Callable
from threading import RLock

from pydantic import ValidationError

from linkylink.domain.entities import ANONYMOUS, RoleType, Session, SessionUser
from linkylink.domain.policy import is_admin
from linkylink.ports.storage import ClientStoragePort
from linkylink.rules.models import StorageRules

logger = logging.getLogger(__name__)

SessionListener = Callable[[Session], None]


class SessionStore:
    """
    Current identity and bearer credential of this client.

    The session lives in memory and in durable client storage under two
    fixed keys. Every consumer (views, router, API client) reads it from the
    one instance it was handed; listeners are told about each change.
    """

    def __init__(self, storage: ClientStoragePort, keys: StorageRules) -> None:
        self.storage = storage
        self.keys = keys
        self._lock = RLock()
        self._listeners: list[SessionListener] = []
        self._session = self._rehydrate()

    def _rehydrate(self) -> Session:
        try:
            token = self.storage.get(self.keys.token_key)
            raw_user = self.storage.get(self.keys.user_key)
            if not token or not raw_user:
                return ANONYMOUS
            user = SessionUser.model_validate_json(raw_user)
            return Session(user=user, credential=token)
        except (ValidationError, ValueError, OSError) as e:
            logger.debug(f"Stored session ignored: {e}")
            return ANONYMOUS

    # --- Read side ---

    @property
    def session(self) -> Session:
        return self._session

    @property
    def user(self) -> SessionUser | None:
        return self._session.user

    @property
    def credential(self) -> str | None:
        return self._session.credential

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    def is_admin(self) -> bool:
        return is_admin(self._session.user)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that removes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, session: Session) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(session)

    # --- Write side ---

    def login(self, credential: str, username: str, role: RoleType) -> Session:
        """Store a new session. Storage is written before memory changes."""
        if not credential:
            raise ValueError("credential must not be empty")
        if not username:
            raise ValueError("username must not be empty")
        user = SessionUser(username=username, role=role)
        session = Session(user=user, credential=credential)

        with self._lock:
            self.storage.set(self.keys.token_key, credential)
            try:
                self.storage.set(self.keys.user_key, user.model_dump_json())
            except Exception:
                self.storage.remove(self.keys.token_key)
                raise
            self._session = session

        logger.info(f"Signed in as {username} ({role})")
        self._notify(session)
        return session

    def logout(self) -> bool:
        """Clear memory and storage. Returns False if there was no session."""
        with self._lock:
            self.storage.remove(self.keys.token_key)
            self.storage.remove(self.keys.user_key)
            previous = self._session
            self._session = ANONYMOUS

        if previous.user is None:
            return False

        logger.info(f"Signed out {previous.user.username}")
        self._notify(ANONYMOUS)
        return True
