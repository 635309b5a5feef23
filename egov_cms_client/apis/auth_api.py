from __future__ import annotations

from egov_cms_client.config import AppSettings
from egov_cms_client.http import HttpClient
from egov_cms_client.models import ApiEnvelope

LOGIN_PATH = "/auth/login-jwt"
LOGOUT_PATH = "/auth/logout"


class AuthApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def login(self, user_id: str, password: str, user_se: str = "USR") -> ApiEnvelope:
        return self._http_client.request_json(
            "POST",
            LOGIN_PATH,
            {"id": user_id, "password": password, "userSe": user_se},
        )

    def logout(self, token: str | None = None) -> ApiEnvelope:
        return self._http_client.request_json("POST", LOGOUT_PATH, token=token)
