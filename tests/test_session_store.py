import json
from unittest.mock import MagicMock

import pytest

from egov_cms_client.apis import AuthApi
from egov_cms_client.http import ApiHttpError, ApiTransportError
from egov_cms_client.models import User
from egov_cms_client.storage import TOKEN_KEY, USER_KEY, MemoryStorage, StorageError
from egov_cms_client.stores import SessionStore
from egov_cms_client.stores.session import LOGIN_ERROR_MESSAGE, LOGIN_FAILED_MESSAGE

from .conftest import envelope

USER_RECORD = {"id": "hong", "name": "Hong Gildong", "userSe": "USR", "uniqId": "U1"}


@pytest.fixture
def auth_api():
    return MagicMock(spec=AuthApi)


@pytest.fixture
def store(auth_api, storage):
    return SessionStore(auth_api, storage)


def test_login_success_sets_and_persists_user_and_token(store, auth_api, storage):
    auth_api.login.return_value = envelope(200, result={"jToken": "jwt", "resultVO": USER_RECORD})

    assert store.login("hong", "secret") is True

    auth_api.login.assert_called_once_with("hong", "secret", "USR")
    assert store.token == "jwt"
    assert store.user == User.from_dict(USER_RECORD)
    assert store.is_logged_in
    assert not store.is_loading
    assert store.error is None
    assert storage.read(TOKEN_KEY) == "jwt"
    assert json.loads(storage.read(USER_KEY)) == USER_RECORD


def test_login_accepts_string_code_and_top_level_credentials(store, auth_api):
    auth_api.login.return_value = envelope("200", result=None, jToken="jwt", resultVO=USER_RECORD)

    assert store.login("hong", "secret", role="ADM") is True
    auth_api.login.assert_called_once_with("hong", "secret", "ADM")
    assert store.token == "jwt"


def test_rejected_login_leaves_session_empty(store, auth_api, storage):
    auth_api.login.return_value = envelope(400, message="Invalid ID or password.")

    assert store.login("hong", "wrong") is False

    assert store.user is None
    assert store.token is None
    assert store.error == "Invalid ID or password."
    assert storage.keys() == []


def test_rejected_login_without_message_uses_generic_error(store, auth_api):
    auth_api.login.return_value = envelope(500)

    assert store.login("hong", "wrong") is False
    assert store.error == LOGIN_FAILED_MESSAGE


@pytest.mark.parametrize("failure", [ApiTransportError("refused"), ApiHttpError(502, "bad gateway")])
def test_transport_failure_never_raises(store, auth_api, failure):
    auth_api.login.side_effect = failure

    assert store.login("hong", "secret") is False
    assert store.error == LOGIN_ERROR_MESSAGE
    assert store.token is None
    assert not store.is_loading


def test_success_without_token_is_a_failure(store, auth_api):
    auth_api.login.return_value = envelope(200, result={"resultVO": USER_RECORD})

    assert store.login("hong", "secret") is False
    assert store.token is None
    assert store.user is None


@pytest.mark.parametrize("remote_failure", [None, ApiTransportError("down")])
def test_logout_always_clears_state_and_storage(store, auth_api, storage, remote_failure):
    auth_api.login.return_value = envelope(200, result={"jToken": "jwt", "resultVO": USER_RECORD})
    store.login("hong", "secret")
    store.set_error("stale")
    if remote_failure is not None:
        auth_api.logout.side_effect = remote_failure

    store.logout()

    auth_api.logout.assert_called_once_with("jwt")
    assert store.user is None
    assert store.token is None
    assert store.error is None
    assert storage.read(TOKEN_KEY) is None
    assert storage.read(USER_KEY) is None


def test_setters_do_not_touch_storage(store, storage):
    store.set_token("jwt")
    store.set_user(User(id="a", name="A"))
    store.set_error("oops")

    assert store.error == "oops"
    store.clear_error()
    assert store.error is None
    assert storage.keys() == []

    store.persist()
    assert storage.read(TOKEN_KEY) == "jwt"


def test_hydrate_restores_complete_session(auth_api):
    storage = MemoryStorage({TOKEN_KEY: "jwt", USER_KEY: json.dumps(USER_RECORD)})
    store = SessionStore(auth_api, storage)

    assert store.hydrate() is True
    assert store.token == "jwt"
    assert store.user.uniq_id == "U1"


@pytest.mark.parametrize(
    "stored",
    [
        {TOKEN_KEY: "jwt"},
        {USER_KEY: json.dumps(USER_RECORD)},
        {},
    ],
)
def test_hydrate_requires_both_token_and_user(auth_api, stored):
    storage = MemoryStorage(stored)
    store = SessionStore(auth_api, storage)

    assert store.hydrate() is False
    assert store.token is None
    assert store.user is None
    assert not store.is_logged_in
    # Partial data is left alone for a later, complete login to overwrite.
    assert sorted(storage.keys()) == sorted(stored)


@pytest.mark.parametrize("bad_user", ["{not json", '"just a string"', '{"name": "no id"}'])
def test_hydrate_discards_unreadable_user_record(auth_api, bad_user):
    storage = MemoryStorage({TOKEN_KEY: "jwt", USER_KEY: bad_user})
    store = SessionStore(auth_api, storage)

    assert store.hydrate() is False
    assert store.token is None
    assert storage.keys() == []


def test_hydrate_without_storage_is_a_no_op(auth_api):
    store = SessionStore(auth_api, storage=None)

    assert store.hydrate() is False
    assert not store.has_storage
    store.persist()


def test_subscribers_see_each_change_until_unsubscribed(store):
    seen = []
    unsubscribe = store.subscribe(lambda state: seen.append(state.token))

    store.set_token("one")
    unsubscribe()
    store.set_token("two")

    assert seen == ["one"]


class BrokenStorage(MemoryStorage):
    """Reads work; every write or removal fails like a locked storage file."""

    def write(self, key, value):
        raise StorageError("locked")

    def remove(self, key):
        raise StorageError("locked")


def test_login_survives_a_storage_failure(auth_api):
    auth_api.login.return_value = envelope(200, result={"jToken": "jwt", "resultVO": USER_RECORD})
    store = SessionStore(auth_api, BrokenStorage())

    assert store.login("hong", "secret") is True
    assert store.token == "jwt"
    assert store.error is None


def test_logout_survives_a_storage_failure(auth_api):
    store = SessionStore(auth_api, BrokenStorage())
    store.set_token("jwt")
    store.set_user(User(id="hong", name="Hong"))

    store.logout()

    assert store.token is None
    assert store.user is None


def test_hydrate_treats_unreadable_storage_as_signed_out(auth_api):
    storage = MagicMock(spec=MemoryStorage)
    storage.read.side_effect = StorageError("locked")
    store = SessionStore(auth_api, storage)

    assert store.hydrate() is False
    assert not store.is_logged_in
