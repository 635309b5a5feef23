from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from egov_cms_client.apis import AdminApi, AuthApi, BoardApi, MemberApi, MypageApi
from egov_cms_client.config import AppSettings
from egov_cms_client.models import ApiEnvelope, User
from egov_cms_client.services import CmsService
from egov_cms_client.storage import MemoryStorage
from egov_cms_client.stores import SessionStore, UIStore


class FakeScheduler:
    """Manual clock with Tk-style after/after_cancel."""

    def __init__(self):
        self.now = 0
        self._tasks: dict[int, tuple[int, object]] = {}
        self._next_handle = 0

    def after(self, ms, func):
        handle = self._next_handle
        self._next_handle += 1
        self._tasks[handle] = (self.now + ms, func)
        return handle

    def after_cancel(self, handle):
        self._tasks.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def advance(self, ms):
        self.now += ms
        due = sorted((when, handle) for handle, (when, _) in self._tasks.items() if when <= self.now)
        for _, handle in due:
            entry = self._tasks.pop(handle, None)
            if entry is not None:
                entry[1]()


class RecordingNavigator:
    def __init__(self, confirm_answer: bool = True):
        self.alerts: list[str] = []
        self.confirms: list[str] = []
        self.routes: list[str] = []
        self.confirm_answer = confirm_answer

    def alert(self, message):
        self.alerts.append(message)

    def confirm(self, message):
        self.confirms.append(message)
        return self.confirm_answer

    def push(self, route):
        self.routes.append(route)


def envelope(code=200, message="", result=None, **extra) -> ApiEnvelope:
    payload = {"resultCode": code, "resultMessage": message, "result": result, **extra}
    return ApiEnvelope.from_json(payload)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        base_url="http://cms.test",
        timeout_seconds=None,
        auth_scheme="",
        storage_path="unused.json",
        log_level="INFO",
        toast_duration_ms=3000,
    )


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def apis() -> SimpleNamespace:
    return SimpleNamespace(
        auth=MagicMock(spec=AuthApi),
        member=MagicMock(spec=MemberApi),
        board=MagicMock(spec=BoardApi),
        mypage=MagicMock(spec=MypageApi),
        admin=MagicMock(spec=AdminApi),
    )


@pytest.fixture
def service(settings, apis, storage, scheduler) -> CmsService:
    return CmsService(
        settings=settings,
        session=SessionStore(apis.auth, storage),
        ui=UIStore(scheduler),
        member_api=apis.member,
        board_api=apis.board,
        mypage_api=apis.mypage,
        admin_api=apis.admin,
    )


@pytest.fixture
def signed_in(service) -> User:
    user = User(id="hong", name="Hong Gildong", user_se="USR", uniq_id="USRCNFRM_00000000001")
    service.session.set_user(user)
    service.session.set_token("jwt-token")
    return user
