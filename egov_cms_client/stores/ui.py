"""Transient UI state: loading indicator, menus, toasts and the active modal."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
from typing import Any, Callable, Protocol
import uuid

from egov_cms_client.models import TOAST_TYPES, Modal, Toast, ToastType

logger = logging.getLogger(__name__)

DEFAULT_TOAST_DURATION_MS = 3000


class Scheduler(Protocol):
    """Anything with Tk-style ``after``/``after_cancel``."""

    def after(self, ms: int, func: Callable[[], None]) -> Any: ...

    def after_cancel(self, handle: Any) -> None: ...


class TimerScheduler:
    def after(self, ms: int, func: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(ms / 1000.0, func)
        timer.daemon = True
        timer.start()
        return timer

    def after_cancel(self, handle: threading.Timer) -> None:
        handle.cancel()


def generate_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class UIState:
    is_loading: bool = False
    loading_text: str | None = None
    is_sidebar_open: bool = True
    is_mobile_menu_open: bool = False
    toasts: tuple[Toast, ...] = ()
    active_modal: Modal | None = None


UIListener = Callable[[UIState], None]


class UIStore:
    def __init__(
        self,
        scheduler: Scheduler | None = None,
        default_toast_duration_ms: int = DEFAULT_TOAST_DURATION_MS,
    ):
        self._scheduler: Scheduler = scheduler or TimerScheduler()
        self._default_toast_duration_ms = default_toast_duration_ms
        self._state = UIState()
        self._timers: dict[str, tuple[Scheduler, Any]] = {}
        self._listeners: list[UIListener] = []
        self._lock = threading.RLock()

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def loading_text(self) -> str | None:
        return self._state.loading_text

    @property
    def is_sidebar_open(self) -> bool:
        return self._state.is_sidebar_open

    @property
    def is_mobile_menu_open(self) -> bool:
        return self._state.is_mobile_menu_open

    @property
    def toasts(self) -> tuple[Toast, ...]:
        return self._state.toasts

    @property
    def active_modal(self) -> Modal | None:
        return self._state.active_modal

    def snapshot(self) -> UIState:
        return self._state

    def use_scheduler(self, scheduler: Scheduler) -> None:
        """Swap the scheduler for new toasts, e.g. once a Tk root exists."""
        with self._lock:
            self._scheduler = scheduler

    def subscribe(self, listener: UIListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def set_loading(self, is_loading: bool, text: str | None = None) -> None:
        self._update(is_loading=is_loading, loading_text=text or None)

    def toggle_sidebar(self) -> None:
        with self._lock:
            self._update(is_sidebar_open=not self._state.is_sidebar_open)

    def set_sidebar_open(self, is_open: bool) -> None:
        self._update(is_sidebar_open=is_open)

    def toggle_mobile_menu(self) -> None:
        with self._lock:
            self._update(is_mobile_menu_open=not self._state.is_mobile_menu_open)

    def set_mobile_menu_open(self, is_open: bool) -> None:
        self._update(is_mobile_menu_open=is_open)

    def add_toast(self, type: ToastType, message: str, duration: int | None = None) -> Toast:
        if type not in TOAST_TYPES:
            raise ValueError(f"Unknown toast type: {type!r}")

        if duration is None:
            duration = self._default_toast_duration_ms
        toast = Toast(id=generate_id(), type=type, message=message, duration=duration)

        with self._lock:
            self._update(toasts=self._state.toasts + (toast,))
            if duration > 0:
                handle = self._scheduler.after(duration, lambda: self._expire_toast(toast.id))
                self._timers[toast.id] = (self._scheduler, handle)
        return toast

    def success(self, message: str, duration: int | None = None) -> Toast:
        return self.add_toast("success", message, duration)

    def error(self, message: str, duration: int | None = None) -> Toast:
        return self.add_toast("error", message, duration)

    def warning(self, message: str, duration: int | None = None) -> Toast:
        return self.add_toast("warning", message, duration)

    def info(self, message: str, duration: int | None = None) -> Toast:
        return self.add_toast("info", message, duration)

    def remove_toast(self, toast_id: str) -> None:
        with self._lock:
            pending = self._timers.pop(toast_id, None)
            if pending is not None:
                scheduler, handle = pending
                scheduler.after_cancel(handle)
            if not any(toast.id == toast_id for toast in self._state.toasts):
                return
            self._update(toasts=tuple(t for t in self._state.toasts if t.id != toast_id))

    def clear_toasts(self) -> None:
        with self._lock:
            pending = list(self._timers.values())
            self._timers.clear()
            for scheduler, handle in pending:
                scheduler.after_cancel(handle)
            self._update(toasts=())

    def _expire_toast(self, toast_id: str) -> None:
        with self._lock:
            self._timers.pop(toast_id, None)
            if not any(toast.id == toast_id for toast in self._state.toasts):
                return
            logger.debug("Toast %s expired", toast_id)
            self._update(toasts=tuple(t for t in self._state.toasts if t.id != toast_id))

    def open_modal(
        self,
        title: str | None = None,
        content: Any = None,
        on_confirm: Callable[[], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> Modal:
        modal = Modal(
            id=generate_id(),
            title=title,
            content=content,
            on_confirm=on_confirm,
            on_cancel=on_cancel,
        )
        self._update(active_modal=modal)
        return modal

    def close_modal(self) -> None:
        self._update(active_modal=None)

    def confirm_modal(self) -> None:
        modal = self._state.active_modal
        self.close_modal()
        if modal is not None and modal.on_confirm is not None:
            modal.on_confirm()

    def cancel_modal(self) -> None:
        modal = self._state.active_modal
        self.close_modal()
        if modal is not None and modal.on_cancel is not None:
            modal.on_cancel()

    def _update(self, **changes: Any) -> None:
        with self._lock:
            self._state = UIState(
                is_loading=changes.get("is_loading", self._state.is_loading),
                loading_text=changes.get("loading_text", self._state.loading_text),
                is_sidebar_open=changes.get("is_sidebar_open", self._state.is_sidebar_open),
                is_mobile_menu_open=changes.get("is_mobile_menu_open", self._state.is_mobile_menu_open),
                toasts=changes.get("toasts", self._state.toasts),
                active_modal=changes.get("active_modal", self._state.active_modal),
            )
            state = self._state
            listeners = list(self._listeners)

        for listener in listeners:
            listener(state)
