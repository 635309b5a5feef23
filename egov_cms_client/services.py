from __future__ import annotations

from typing import Any, Iterable, Mapping

from egov_cms_client.apis import AdminApi, AuthApi, BoardApi, MemberApi, MypageApi
from egov_cms_client.config import AppSettings
from egov_cms_client.http import FilePart, HttpClient
from egov_cms_client.models import ApiEnvelope
from egov_cms_client.storage import FileStorage, KeyValueStorage
from egov_cms_client.stores import SessionStore, UIStore
from egov_cms_client.stores.ui import Scheduler


class CmsService:
    """Entry point for pages: endpoint groups plus the session and UI stores.

    Authenticated calls read the token from the session store at call time;
    the endpoint groups never change the session themselves.
    """

    def __init__(
        self,
        settings: AppSettings,
        session: SessionStore,
        ui: UIStore,
        member_api: MemberApi,
        board_api: BoardApi,
        mypage_api: MypageApi,
        admin_api: AdminApi,
    ):
        self._settings = settings
        self._session = session
        self._ui = ui
        self._member_api = member_api
        self._board_api = board_api
        self._mypage_api = mypage_api
        self._admin_api = admin_api

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def session(self) -> SessionStore:
        return self._session

    @property
    def ui(self) -> UIStore:
        return self._ui

    def get_signup_form_data(self) -> ApiEnvelope:
        return self._member_api.get_signup_form_data()

    def check_member_id(self, member_id: str) -> ApiEnvelope:
        return self._member_api.check_id(member_id)

    def signup(self, form: Mapping[str, str]) -> ApiEnvelope:
        return self._member_api.signup(form)

    def get_agreement(self) -> ApiEnvelope:
        return self._member_api.get_agreement()

    def list_articles(
        self,
        bbs_id: str,
        page_index: int = 1,
        search_cnd: str | None = None,
        search_wrd: str | None = None,
    ) -> ApiEnvelope:
        return self._board_api.get_list(self._session.token, bbs_id, page_index, search_cnd, search_wrd)

    def get_article(self, bbs_id: str, ntt_id: int) -> ApiEnvelope:
        return self._board_api.get_detail(self._session.token, bbs_id, ntt_id)

    def create_article(
        self,
        bbs_id: str,
        title: str,
        content: str,
        files: Iterable[FilePart] = (),
    ) -> ApiEnvelope:
        return self._board_api.create(self._session.token, bbs_id, title, content, files)

    def update_article(
        self,
        ntt_id: int,
        bbs_id: str,
        title: str,
        content: str,
        files: Iterable[FilePart] = (),
    ) -> ApiEnvelope:
        return self._board_api.update(self._session.token, ntt_id, bbs_id, title, content, files)

    def delete_article(self, bbs_id: str, ntt_id: int) -> ApiEnvelope:
        return self._board_api.delete(self._session.token, bbs_id, ntt_id)

    def get_board_info(self, bbs_id: str) -> ApiEnvelope:
        return self._board_api.get_file_atch_info(self._session.token, bbs_id)

    def get_my_info(self) -> ApiEnvelope:
        return self._mypage_api.get_my_info(self._session.token)

    def update_my_info(self, data: Mapping[str, Any]) -> ApiEnvelope:
        return self._mypage_api.update_my_info(self._session.token, data)

    def delete_account(self, uniq_id: str) -> ApiEnvelope:
        return self._mypage_api.delete_account(self._session.token, uniq_id)

    def list_members(self, page_index: int = 1) -> ApiEnvelope:
        return self._admin_api.get_members(self._session.token, page_index)


def build_service(
    settings: AppSettings,
    storage: KeyValueStorage | None = None,
    scheduler: Scheduler | None = None,
    http_client: HttpClient | None = None,
) -> CmsService:
    http_client = http_client or HttpClient(settings)
    if storage is None:
        storage = FileStorage(settings.storage_path)

    session = SessionStore(AuthApi(settings, http_client), storage)
    ui = UIStore(scheduler, default_toast_duration_ms=settings.toast_duration_ms)
    return CmsService(
        settings=settings,
        session=session,
        ui=ui,
        member_api=MemberApi(settings, http_client),
        board_api=BoardApi(settings, http_client),
        mypage_api=MypageApi(settings, http_client),
        admin_api=AdminApi(settings, http_client),
    )
