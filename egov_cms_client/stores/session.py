"""Client-side session: the signed-in user and their token.

The store is the only reader and writer of the ``jToken`` and ``user``
storage entries. Pages go through it instead of touching storage.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import threading
from typing import Any, Callable

from egov_cms_client.apis import AuthApi
from egov_cms_client.http import ApiHttpError, ApiTransportError
from egov_cms_client.models import User
from egov_cms_client.storage import TOKEN_KEY, USER_KEY, KeyValueStorage, StorageError

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Login failed."
LOGIN_ERROR_MESSAGE = "An error occurred while logging in."

DEFAULT_ROLE = "USR"


@dataclass(frozen=True)
class SessionState:
    user: User | None = None
    token: str | None = None
    is_loading: bool = False
    error: str | None = None

    @property
    def is_logged_in(self) -> bool:
        return bool(self.token)


SessionListener = Callable[[SessionState], None]


class SessionStore:
    def __init__(self, auth_api: AuthApi, storage: KeyValueStorage | None = None):
        self._auth_api = auth_api
        self._storage = storage
        self._state = SessionState()
        self._listeners: list[SessionListener] = []
        self._lock = threading.RLock()

    @property
    def user(self) -> User | None:
        return self._state.user

    @property
    def token(self) -> str | None:
        return self._state.token

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def error(self) -> str | None:
        return self._state.error

    @property
    def is_logged_in(self) -> bool:
        return self._state.is_logged_in

    @property
    def has_storage(self) -> bool:
        return self._storage is not None

    def snapshot(self) -> SessionState:
        return self._state

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def login(self, identifier: str, secret: str, role: str = DEFAULT_ROLE) -> bool:
        self._update(is_loading=True, error=None)

        try:
            envelope = self._auth_api.login(identifier, secret, role)
        except (ApiTransportError, ApiHttpError) as exc:
            logger.warning("Login request failed: %s", exc)
            self._update(is_loading=False, error=LOGIN_ERROR_MESSAGE)
            return False

        if not envelope.ok:
            self._update(is_loading=False, error=envelope.message_or(LOGIN_FAILED_MESSAGE))
            return False

        token, user = self._extract_credentials(envelope.result_dict(), envelope.raw)
        if not token or user is None:
            logger.warning("Login succeeded without a token or user record")
            self._update(is_loading=False, error=LOGIN_FAILED_MESSAGE)
            return False

        self._update(user=user, token=token, is_loading=False, error=None)
        try:
            self.persist()
        except StorageError as exc:
            logger.error("Signed in, but the session could not be saved: %s", exc)
        logger.info("Signed in as %s", user.id)
        return True

    @staticmethod
    def _extract_credentials(
        result: dict[str, Any],
        raw: dict[str, Any],
    ) -> tuple[str | None, User | None]:
        # Some backend versions put jToken/resultVO at the top level.
        token = result.get("jToken") or raw.get("jToken")
        user_data = result.get("resultVO") or raw.get("resultVO")

        user: User | None = None
        if isinstance(user_data, dict):
            try:
                user = User.from_dict(user_data)
            except ValueError as exc:
                logger.warning("Ignoring malformed user record: %s", exc)

        return (str(token) if token else None), user

    def logout(self) -> None:
        token = self._state.token
        try:
            self._auth_api.logout(token)
        except (ApiTransportError, ApiHttpError) as exc:
            logger.warning("Remote logout failed, clearing local session anyway: %s", exc)

        self._update(user=None, token=None, error=None)
        try:
            self._forget_stored_session()
        except StorageError as exc:
            logger.error("Signed out, but the stored session could not be removed: %s", exc)
        logger.info("Signed out")

    def set_user(self, user: User | None) -> None:
        self._update(user=user)

    def set_token(self, token: str | None) -> None:
        self._update(token=token)

    def set_error(self, error: str | None) -> None:
        self._update(error=error)

    def clear_error(self) -> None:
        self._update(error=None)

    def persist(self) -> None:
        """Write the current token/user pair to storage."""
        if self._storage is None:
            return

        state = self._state
        if state.token:
            self._storage.write(TOKEN_KEY, state.token)
        else:
            self._storage.remove(TOKEN_KEY)

        if state.user is not None:
            self._storage.write(USER_KEY, json.dumps(state.user.to_dict(), ensure_ascii=False))
        else:
            self._storage.remove(USER_KEY)

    def hydrate(self) -> bool:
        """Restore the session from storage.

        Both the token and a readable user record must be present; anything
        less leaves the store signed out. Returns whether a session was restored.
        """
        if self._storage is None:
            return False

        try:
            token = self._storage.read(TOKEN_KEY)
            user_text = self._storage.read(USER_KEY)
        except StorageError as exc:
            logger.error("Stored session could not be read: %s", exc)
            return False
        if not token or not user_text:
            return False

        try:
            user = User.from_dict(json.loads(user_text))
        except ValueError as exc:
            logger.warning("Discarding unreadable stored session: %s", exc)
            try:
                self._forget_stored_session()
            except StorageError as storage_exc:
                logger.error("Unreadable stored session could not be removed: %s", storage_exc)
            return False

        self._update(token=token, user=user)
        return True

    def _forget_stored_session(self) -> None:
        if self._storage is not None:
            self._storage.remove(TOKEN_KEY)
            self._storage.remove(USER_KEY)

    def _update(self, **changes: Any) -> None:
        with self._lock:
            self._state = SessionState(
                user=changes.get("user", self._state.user),
                token=changes.get("token", self._state.token),
                is_loading=changes.get("is_loading", self._state.is_loading),
                error=changes.get("error", self._state.error),
            )
            state = self._state
            listeners = list(self._listeners)

        for listener in listeners:
            listener(state)
