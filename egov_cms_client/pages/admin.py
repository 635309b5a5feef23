from __future__ import annotations

from egov_cms_client.models import Member, PaginationInfo
from egov_cms_client.pages import messages
from egov_cms_client.pages.base import Page
from egov_cms_client.pages.pagination import Paginator

MEMBER_STATUS_NAMES = {
    "P": "Active",
    "D": "Withdrawn",
    "S": "Suspended",
}


def status_name(code: str) -> str:
    return MEMBER_STATUS_NAMES.get(code, code)


class AdminPage(Page):
    """Member list for administrators.

    ``is_admin`` only drives what the page shows; the ``/members`` endpoint
    answers 403 for anyone the backend does not consider an administrator.
    """

    def __init__(self, service, navigator):
        super().__init__(service, navigator)
        self.members: list[Member] = []
        self.paginator = Paginator()
        self.total_records = 0
        self.is_admin = False

    def mount(self) -> bool:
        if not self.require_login():
            return False
        user = self.session.user
        self.is_admin = bool(user and user.is_admin)
        return self.load(self.paginator.current_page)

    def load(self, page: int | None = None) -> bool:
        target = self.paginator.target(self.paginator.current_page if page is None else page)
        self.loading = True
        self.error = ""
        try:
            envelope = self._call(self._service.list_members, target)
        finally:
            self.loading = False

        if envelope is None or not envelope.ok:
            self._fail(envelope, messages.MEMBERS_LOAD_FAILED, forbidden=messages.ADMIN_PERMISSION_REQUIRED)
            return False

        result = envelope.result_dict()
        items = result.get("resultList")
        self.members = [Member.from_dict(item) for item in items if isinstance(item, dict)] if isinstance(items, list) else []

        if "paginationInfo" in result:
            info = PaginationInfo.from_dict(result["paginationInfo"])
            self.paginator.update_total(info.total_page_count)
            self.total_records = info.total_record_count
        self.paginator.current_page = self.paginator.target(target)
        return True

    def go_to(self, page: int) -> bool:
        target = self.paginator.target(page)
        if target == self.paginator.current_page:
            return False
        return self.load(target)

    def next_page(self) -> bool:
        return self.go_to(self.paginator.current_page + 1)

    def previous_page(self) -> bool:
        return self.go_to(self.paginator.current_page - 1)
