from __future__ import annotations

from typing import Any, Mapping

from egov_cms_client.config import AppSettings
from egov_cms_client.http import HttpClient
from egov_cms_client.models import ApiEnvelope


class MypageApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def get_my_info(self, token: str | None) -> ApiEnvelope:
        return self._http_client.request_json("GET", "/mypage", token=token)

    def update_my_info(self, token: str | None, data: Mapping[str, Any]) -> ApiEnvelope:
        return self._http_client.request_json("PUT", "/mypage/update", dict(data), token=token)

    def delete_account(self, token: str | None, uniq_id: str) -> ApiEnvelope:
        return self._http_client.request_json("PUT", "/mypage/delete", {"uniqId": uniq_id}, token=token)
