from __future__ import annotations

import threading
from typing import Any, Callable, Protocol

from egov_cms_client.stores.ui import Scheduler

HOME_ROUTE = "/"
LOGIN_ROUTE = "/login"
SIGNUP_ROUTE = "/signup"
BOARD_ROUTE = "/board"
MYPAGE_ROUTE = "/mypage"
ADMIN_ROUTE = "/admin"


def board_list_route(bbs_id: str) -> str:
    return f"{BOARD_ROUTE}/{bbs_id}"


def board_detail_route(bbs_id: str, ntt_id: int) -> str:
    return f"{BOARD_ROUTE}/{bbs_id}/{ntt_id}"


def board_write_route(bbs_id: str, edit_ntt_id: int | None = None) -> str:
    route = f"{BOARD_ROUTE}/{bbs_id}/write"
    if edit_ntt_id is not None:
        route += f"?edit={edit_ntt_id}"
    return route


class Navigator(Protocol):
    """Blocking dialogs and route changes, provided by whatever hosts the pages."""

    def alert(self, message: str) -> None: ...

    def confirm(self, message: str) -> bool: ...

    def push(self, route: str) -> None: ...


class UiThreadNavigator:
    """Runs navigator calls on the UI thread.

    Calls made from worker threads are queued with ``scheduler.after(0, ...)``
    and block until the UI thread has run them, so ``confirm`` still returns
    the user's answer.
    """

    def __init__(self, target: Navigator, scheduler: Scheduler, ui_thread: threading.Thread | None = None):
        self._target = target
        self._scheduler = scheduler
        self._ui_thread = ui_thread or threading.main_thread()

    def alert(self, message: str) -> None:
        self._run(self._target.alert, message)

    def confirm(self, message: str) -> bool:
        return bool(self._run(self._target.confirm, message))

    def push(self, route: str) -> None:
        self._run(self._target.push, route)

    def _run(self, func: Callable[[str], Any], argument: str) -> Any:
        if threading.current_thread() is self._ui_thread:
            return func(argument)

        finished = threading.Event()
        outcome: dict[str, Any] = {}

        def run_on_ui_thread() -> None:
            try:
                outcome["value"] = func(argument)
            finally:
                finished.set()

        self._scheduler.after(0, run_on_ui_thread)
        finished.wait()
        return outcome.get("value")
