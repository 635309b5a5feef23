from __future__ import annotations

from typing import Mapping
from urllib.parse import quote

from egov_cms_client.config import AppSettings
from egov_cms_client.http import HttpClient
from egov_cms_client.models import ApiEnvelope


class MemberApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def get_signup_form_data(self) -> ApiEnvelope:
        """Password-hint and gender code lists for the signup form."""
        return self._http_client.request_json("GET", "/etc/member_insert")

    def check_id(self, member_id: str) -> ApiEnvelope:
        member_id = member_id.strip()
        if not member_id:
            raise ValueError("Member id is required")
        return self._http_client.request_json(
            "GET",
            f"/etc/member_checkid/{quote(member_id, safe='')}",
        )

    def signup(self, form: Mapping[str, str]) -> ApiEnvelope:
        return self._http_client.request_form("POST", "/etc/member_insert", form)

    def get_agreement(self) -> ApiEnvelope:
        return self._http_client.request_json("GET", "/etc/member_agreement")
