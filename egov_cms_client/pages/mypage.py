from __future__ import annotations

from dataclasses import replace
import logging
from typing import Any

from egov_cms_client.models import MY_INFO_FIELDS, CodeItem
from egov_cms_client.pages import messages
from egov_cms_client.pages.base import Page
from egov_cms_client.pages.navigation import HOME_ROUTE, LOGIN_ROUTE
from egov_cms_client.storage import StorageError

logger = logging.getLogger(__name__)


class MypagePage(Page):
    def __init__(self, service, navigator):
        super().__init__(service, navigator)
        self.form: dict[str, str] = {name: "" for name in MY_INFO_FIELDS}
        self.form["password"] = ""
        self.member_record: dict[str, Any] = {}
        self.password_hints: list[CodeItem] = []
        self.gender_codes: list[CodeItem] = []
        self.is_editing = False
        self.saving = False

    def mount(self) -> bool:
        if not self.require_login():
            return False
        return self.load()

    def load(self) -> bool:
        self.loading = True
        self.error = ""
        try:
            envelope = self._call(self._service.get_my_info)
        finally:
            self.loading = False

        if envelope is None or not envelope.ok:
            self._fail(envelope, messages.MYINFO_LOAD_FAILED, forbidden=messages.LOGIN_REQUIRED)
            if envelope is not None and envelope.forbidden:
                self._navigator.push(LOGIN_ROUTE)
            return False

        result = envelope.result_dict()
        member = result.get("mberManageVO")
        if isinstance(member, dict):
            self.member_record = dict(member)
            for name in MY_INFO_FIELDS:
                value = member.get(name)
                self.form[name] = "" if value is None else str(value)
            self.form["password"] = ""
        if "passwordHint_result" in result:
            self.password_hints = CodeItem.list_from(result["passwordHint_result"])
        if "sexdstnCode_result" in result:
            self.gender_codes = CodeItem.list_from(result["sexdstnCode_result"])
        return True

    def set_field(self, name: str, value: str) -> None:
        if name not in self.form:
            raise KeyError(name)
        self.form[name] = value

    def update_payload(self) -> dict[str, Any]:
        """The loaded member record with the edited fields laid over it."""
        return {**self.member_record, **self.form}

    def start_editing(self) -> None:
        self.is_editing = True
        self.success = ""

    def save(self) -> bool:
        self.saving = True
        self.error = ""
        self.success = ""
        try:
            envelope = self._call(self._service.update_my_info, self.update_payload())
        finally:
            self.saving = False

        if envelope is None or not envelope.ok:
            self._fail(envelope, messages.MYINFO_UPDATE_FAILED)
            return False

        self.success = messages.MYINFO_UPDATED
        self.is_editing = False

        user = self.session.user
        if user is not None:
            self.session.set_user(replace(user, name=self.form["mberNm"]))
            try:
                self.session.persist()
            except StorageError as exc:
                logger.error("Updated name could not be saved locally: %s", exc)
        return True

    def delete_account(self) -> bool:
        if not self._navigator.confirm(messages.CONFIRM_WITHDRAW):
            return False

        envelope = self._call(self._service.delete_account, self.form["uniqId"])
        if envelope is None:
            self._navigator.alert(messages.CONNECTION_FAILED)
            return False
        if not envelope.ok:
            self._navigator.alert(envelope.message_or(messages.WITHDRAW_FAILED))
            return False

        self._navigator.alert(messages.WITHDRAW_DONE)
        self.session.logout()
        self._navigator.push(HOME_ROUTE)
        return True

    def gender_name(self, code: str) -> str:
        return _code_name(self.gender_codes, code)

    def hint_name(self, code: str) -> str:
        return _code_name(self.password_hints, code)


def _code_name(items: list[CodeItem], code: str) -> str:
    for item in items:
        if item.code == code:
            return item.code_nm or code
    return code
