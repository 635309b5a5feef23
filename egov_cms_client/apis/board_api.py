from __future__ import annotations

from typing import Any, Iterable

from egov_cms_client.config import AppSettings
from egov_cms_client.http import FilePart, HttpClient
from egov_cms_client.models import ApiEnvelope


class BoardApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def get_list(
        self,
        token: str | None,
        bbs_id: str,
        page_index: int = 1,
        search_cnd: str | None = None,
        search_wrd: str | None = None,
    ) -> ApiEnvelope:
        params: dict[str, Any] = {"bbsId": bbs_id, "pageIndex": str(page_index)}
        if search_cnd:
            params["searchCnd"] = search_cnd
        if search_wrd:
            params["searchWrd"] = search_wrd

        return self._http_client.request_json("GET", "/board", params=params, token=token)

    def get_detail(self, token: str | None, bbs_id: str, ntt_id: int) -> ApiEnvelope:
        return self._http_client.request_json("GET", f"/board/{bbs_id}/{ntt_id}", token=token)

    def create(
        self,
        token: str | None,
        bbs_id: str,
        title: str,
        content: str,
        files: Iterable[FilePart] = (),
    ) -> ApiEnvelope:
        return self._http_client.request_multipart(
            "POST",
            "/board",
            self._article_fields(bbs_id, title, content),
            files=files,
            token=token,
        )

    def update(
        self,
        token: str | None,
        ntt_id: int,
        bbs_id: str,
        title: str,
        content: str,
        files: Iterable[FilePart] = (),
    ) -> ApiEnvelope:
        return self._http_client.request_multipart(
            "PUT",
            f"/board/{ntt_id}",
            self._article_fields(bbs_id, title, content),
            files=files,
            token=token,
        )

    def delete(self, token: str | None, bbs_id: str, ntt_id: int) -> ApiEnvelope:
        # Soft delete; the backend flags the article rather than removing it.
        return self._http_client.request_json("PATCH", f"/board/{bbs_id}/{ntt_id}", {}, token=token)

    def get_file_atch_info(self, token: str | None, bbs_id: str) -> ApiEnvelope:
        return self._http_client.request_json("GET", f"/boardFileAtch/{bbs_id}", token=token)

    @staticmethod
    def _article_fields(bbs_id: str, title: str, content: str) -> dict[str, str]:
        return {"bbsId": bbs_id, "nttSj": title, "nttCn": content}
