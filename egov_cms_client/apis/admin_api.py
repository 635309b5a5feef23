from __future__ import annotations

from egov_cms_client.config import AppSettings
from egov_cms_client.http import HttpClient
from egov_cms_client.models import ApiEnvelope


class AdminApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def get_members(self, token: str | None, page_index: int = 1) -> ApiEnvelope:
        return self._http_client.request_json(
            "GET",
            "/members",
            params={"pageIndex": str(page_index)},
            token=token,
        )
