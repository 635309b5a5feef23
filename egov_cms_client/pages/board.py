"""Board list, detail and write pages.

Edit/delete controls are shown by comparing the signed-in user with the
article's author. That comparison is a display convenience only; the backend
is what actually authorizes changes.
"""

from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass
import logging
import mimetypes
import os

from egov_cms_client.http import FilePart
from egov_cms_client.models import ApiEnvelope, BoardArticle, BoardMaster, PaginationInfo
from egov_cms_client.pages import messages
from egov_cms_client.pages.base import Page
from egov_cms_client.pages.navigation import board_list_route
from egov_cms_client.pages.pagination import Paginator, format_date, format_datetime

logger = logging.getLogger(__name__)

DEFAULT_BOARD_NAME = "Board"


@dataclass(frozen=True)
class BoardInfo:
    bbs_id: str
    name: str
    description: str


BOARDS: tuple[BoardInfo, ...] = (
    BoardInfo("BBSMSTR_AAAAAAAAAAAA", "Notices", "Important announcements."),
    BoardInfo("BBSMSTR_BBBBBBBBBBBB", "Free Board", "A place to share opinions freely."),
    BoardInfo("BBSMSTR_CCCCCCCCCCCC", "Gallery", "Share photos and images."),
)


@dataclass(frozen=True)
class ArticleRow:
    ntt_id: int
    number: int
    title: str
    reply_depth: int
    author: str
    registered: str
    views: int


class BoardListPage(Page):
    def __init__(self, service, navigator, bbs_id: str):
        super().__init__(service, navigator)
        self.bbs_id = bbs_id
        self.board_name = DEFAULT_BOARD_NAME
        self.articles: list[BoardArticle] = []
        self.paginator = Paginator()
        self.search_wrd = ""
        self.search_cnd: str | None = None

    @property
    def can_write(self) -> bool:
        return self.session.is_logged_in

    @property
    def show_login_link(self) -> bool:
        return self.error == messages.LOGIN_REQUIRED

    @property
    def rows(self) -> list[ArticleRow]:
        return [
            ArticleRow(
                ntt_id=article.ntt_id,
                number=article.ntt_no,
                title=article.ntt_sj,
                reply_depth=max(0, article.reply_lc),
                author=article.author_name,
                registered=format_date(article.frst_register_pnttm),
                views=article.inqire_co,
            )
            for article in self.articles
        ]

    def load(self, page: int | None = None) -> bool:
        target = self.paginator.target(self.paginator.current_page if page is None else page)
        self.loading = True
        self.error = ""
        try:
            envelope = self._call(
                self._service.list_articles,
                self.bbs_id,
                target,
                self.search_cnd,
                self.search_wrd.strip() or None,
            )
        finally:
            self.loading = False

        if envelope is None or not envelope.ok:
            self._fail(envelope, messages.ARTICLES_LOAD_FAILED, forbidden=messages.LOGIN_REQUIRED)
            return False

        result = envelope.result_dict()
        items = result.get("resultList")
        self.articles = [BoardArticle.from_dict(item) for item in items if isinstance(item, dict)] if isinstance(items, list) else []

        master = BoardMaster.from_dict(result.get("brdMstrVO"))
        self.board_name = (master.bbs_nm if master else "") or DEFAULT_BOARD_NAME

        if "paginationInfo" in result:
            self.paginator.update_total(PaginationInfo.from_dict(result["paginationInfo"]).total_page_count)
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

    def search(self, word: str, condition: str | None = None) -> bool:
        self.search_wrd = word
        self.search_cnd = condition
        self.paginator.current_page = 1
        return self.load(1)


class BoardDetailPage(Page):
    def __init__(self, service, navigator, bbs_id: str, ntt_id: int):
        super().__init__(service, navigator)
        self.bbs_id = bbs_id
        self.ntt_id = int(ntt_id)
        self.article: BoardArticle | None = None
        self.board_name = DEFAULT_BOARD_NAME
        self.is_author = False
        self.deleting = False

    @property
    def show_login_link(self) -> bool:
        return self.error == messages.LOGIN_REQUIRED

    @property
    def registered_at(self) -> str:
        return format_datetime(self.article.frst_register_pnttm) if self.article else ""

    def load(self) -> bool:
        self.loading = True
        self.error = ""
        try:
            envelope = self._call(self._service.get_article, self.bbs_id, self.ntt_id)
        finally:
            self.loading = False

        if envelope is None or not envelope.ok:
            self._fail(envelope, messages.ARTICLE_LOAD_FAILED, forbidden=messages.LOGIN_REQUIRED)
            return False

        data = envelope.result_dict()
        nested = data.get("result")
        self.article = BoardArticle.from_dict(nested if isinstance(nested, dict) else data)

        master = BoardMaster.from_dict(data.get("brdMstrVO"))
        self.board_name = (master.bbs_nm if master else "") or DEFAULT_BOARD_NAME

        self.is_author = self._check_author(data.get("sessionUniqId"))
        return True

    def _check_author(self, session_uniq_id) -> bool:
        # Only decides whether edit/delete controls are offered.
        user = self.session.user
        if self.article is None or user is None:
            return False
        author = self.article.frst_register_id
        if not author:
            return False
        return session_uniq_id == author or user.uniq_id == author

    def delete(self) -> bool:
        if not self._navigator.confirm(messages.CONFIRM_DELETE_ARTICLE):
            return False

        self.deleting = True
        try:
            envelope = self._call(self._service.delete_article, self.bbs_id, self.ntt_id)
        finally:
            self.deleting = False

        if envelope is None:
            self._navigator.alert(messages.CONNECTION_FAILED)
            return False
        if not envelope.ok:
            self._navigator.alert(envelope.message_or(messages.ARTICLE_DELETE_FAILED))
            return False

        self._navigator.alert(messages.ARTICLE_DELETED)
        self._navigator.push(board_list_route(self.bbs_id))
        return True


class BoardWritePage(Page):
    def __init__(self, service, navigator, bbs_id: str, edit_ntt_id: int | None = None):
        super().__init__(service, navigator)
        self.bbs_id = bbs_id
        self.edit_ntt_id = int(edit_ntt_id) if edit_ntt_id is not None else None
        self.title = ""
        self.content = ""
        self.files: list[FilePart] = []
        self.attachments: list[str] = []
        self.board_name = DEFAULT_BOARD_NAME
        self.board_master: BoardMaster | None = None

    @property
    def is_edit(self) -> bool:
        return self.edit_ntt_id is not None

    def mount(self) -> bool:
        if not self.require_login():
            return False
        self.load_board_info()
        if self.is_edit:
            self.load_article()
        return True

    def attach(self, paths) -> None:
        for path in paths:
            if path not in self.attachments:
                self.attachments.append(path)

    def clear_attachments(self) -> None:
        self.attachments = []

    def load_board_info(self) -> None:
        envelope = self._call(self._service.get_board_info, self.bbs_id)
        if envelope is None:
            logger.warning("Board info for %s could not be loaded", self.bbs_id)
            return
        self.board_master = BoardMaster.from_dict(envelope.result)
        if self.board_master and self.board_master.bbs_nm:
            self.board_name = self.board_master.bbs_nm

    def load_article(self) -> None:
        if self.edit_ntt_id is None:
            return
        envelope = self._call(self._service.get_article, self.bbs_id, self.edit_ntt_id)
        if envelope is None or not envelope.ok:
            logger.warning("Article %s could not be loaded for editing", self.edit_ntt_id)
            return

        data = envelope.result_dict()
        nested = data.get("result")
        article = nested if isinstance(nested, dict) else data
        self.title = str(article.get("nttSj") or "")
        self.content = str(article.get("nttCn") or "")

    def submit(self) -> bool:
        if not self.title.strip():
            self.error = messages.ENTER_TITLE
            return False
        if not self.content.strip():
            self.error = messages.ENTER_CONTENT
            return False

        self.loading = True
        self.error = ""
        try:
            with ExitStack() as stack:
                try:
                    files = list(self.files) + [_open_attachment(stack, path) for path in self.attachments]
                except OSError as exc:
                    logger.error("Attachment could not be read: %s", exc)
                    self.error = messages.ATTACHMENT_READ_FAILED
                    return False
                envelope = self._send(files)
        finally:
            self.loading = False

        fallback = messages.ARTICLE_UPDATE_FAILED if self.is_edit else messages.ARTICLE_CREATE_FAILED
        if envelope is None or not envelope.ok:
            self._fail(envelope, fallback)
            return False

        self.attachments = []
        self._navigator.alert(messages.ARTICLE_UPDATED if self.is_edit else messages.ARTICLE_CREATED)
        self._navigator.push(board_list_route(self.bbs_id))
        return True

    def _send(self, files: list[FilePart]) -> ApiEnvelope | None:
        if self.edit_ntt_id is not None:
            return self._call(
                self._service.update_article,
                self.edit_ntt_id,
                self.bbs_id,
                self.title,
                self.content,
                files,
            )
        return self._call(
            self._service.create_article,
            self.bbs_id,
            self.title,
            self.content,
            files,
        )


def _open_attachment(stack: ExitStack, path: str) -> FilePart:
    mime_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
    handle = stack.enter_context(open(path, "rb"))
    return os.path.basename(path), handle, mime_type
