from __future__ import annotations

from dataclasses import dataclass

from egov_cms_client.models import User
from egov_cms_client.pages import messages
from egov_cms_client.pages.base import Page
from egov_cms_client.pages.navigation import ADMIN_ROUTE, BOARD_ROUTE, HOME_ROUTE, MYPAGE_ROUTE

ENTER_CREDENTIALS = "Please enter your ID and password."


@dataclass(frozen=True)
class FeatureCard:
    title: str
    description: str
    route: str


FEATURES: tuple[FeatureCard, ...] = (
    FeatureCard("Boards", "Notices, free board and other bulletin boards.", BOARD_ROUTE),
    FeatureCard("My Page", "View and edit your member information.", MYPAGE_ROUTE),
    FeatureCard("Administration", "Site, member and board administration.", ADMIN_ROUTE),
)


class HomePage(Page):
    """Landing page with the login form and the signed-in user's name."""

    features = FEATURES

    @property
    def user(self) -> User | None:
        return self.session.user

    def mount(self) -> None:
        if not self.session.is_logged_in:
            self.session.hydrate()

    def login(self, user_id: str, password: str, role: str = "USR") -> bool:
        self.error = ""
        if not user_id.strip() or not password:
            self.error = ENTER_CREDENTIALS
            return False

        self.loading = True
        try:
            logged_in = self.session.login(user_id.strip(), password, role)
        finally:
            self.loading = False

        if not logged_in:
            self.error = self.session.error or ""
            return False

        self.ui.success(messages.LOGIN_SUCCESS)
        self._navigator.push(HOME_ROUTE)
        return True

    def logout(self) -> None:
        self.session.logout()
        self.ui.info(messages.LOGOUT_DONE)
        self._navigator.push(HOME_ROUTE)
