from __future__ import annotations

import logging

from egov_cms_client.models import SIGNUP_FIELDS, CodeItem
from egov_cms_client.pages import messages
from egov_cms_client.pages.base import Page
from egov_cms_client.pages.navigation import LOGIN_ROUTE

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 4


class SignupPage(Page):
    def __init__(self, service, navigator):
        super().__init__(service, navigator)
        self.form: dict[str, str] = {name: "" for name in SIGNUP_FIELDS}
        self.password_confirm = ""
        self.id_checked = False
        self.id_available = False
        self.password_hints: list[CodeItem] = []
        self.gender_codes: list[CodeItem] = []

    def load(self) -> None:
        envelope = self._call(self._service.get_signup_form_data)
        if envelope is None:
            logger.warning("Signup form codes could not be loaded")
            return

        result = envelope.result_dict()
        self.password_hints = CodeItem.list_from(result.get("passwordHint_result"))
        self.gender_codes = CodeItem.list_from(result.get("sexdstnCode_result"))

    def set_field(self, name: str, value: str) -> None:
        if name not in self.form:
            raise KeyError(name)
        self.form[name] = value
        if name == "mberId":
            self.id_checked = False
            self.id_available = False

    @property
    def passwords_match(self) -> bool:
        return self.form["password"] == self.password_confirm

    def check_id(self) -> bool:
        member_id = self.form["mberId"].strip()
        if not member_id:
            self.error = messages.ENTER_ID
            return False

        envelope = self._call(self._service.check_member_id, member_id)
        if envelope is None:
            self.error = messages.ID_CHECK_FAILED
            return False

        self.id_checked = True
        used_count = envelope.result_dict().get("usedCnt")
        if used_count == 0:
            self.id_available = True
            self.error = ""
            self.success = messages.ID_AVAILABLE
        else:
            self.id_available = False
            self.success = ""
            self.error = messages.ID_IN_USE
        return self.id_available

    def validate(self) -> str | None:
        if not self.id_checked or not self.id_available:
            return messages.CHECK_ID_FIRST
        if not self.passwords_match:
            return messages.PASSWORD_MISMATCH
        if len(self.form["password"]) < MIN_PASSWORD_LENGTH:
            return messages.PASSWORD_TOO_SHORT
        return None

    def submit(self) -> bool:
        self.error = ""
        self.success = ""

        problem = self.validate()
        if problem is not None:
            self.error = problem
            return False

        self.loading = True
        try:
            envelope = self._call(self._service.signup, dict(self.form))
        finally:
            self.loading = False

        if envelope is None or not envelope.ok:
            self._fail(envelope, messages.SIGNUP_FAILED)
            return False

        self.success = messages.SIGNUP_DONE
        self.ui.success(messages.SIGNUP_DONE)
        self._navigator.push(LOGIN_ROUTE)
        return True
