from .session import SessionState, SessionStore
from .ui import TimerScheduler, UIState, UIStore

__all__ = ["SessionState", "SessionStore", "TimerScheduler", "UIState", "UIStore"]
