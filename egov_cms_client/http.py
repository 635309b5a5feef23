from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence

import requests

from egov_cms_client.config import AppSettings
from egov_cms_client.models import ApiEnvelope

logger = logging.getLogger(__name__)

# (file name, content, content type) as accepted by requests' ``files=``.
FilePart = tuple[str, Any, str]


class ApiHttpError(RuntimeError):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class ApiTransportError(RuntimeError):
    pass


class HttpClient:
    def __init__(self, settings: AppSettings, session: requests.Session | None = None):
        self._settings = settings
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    def request_json(
        self,
        method: str,
        path: str,
        payload: Any = None,
        params: Mapping[str, Any] | None = None,
        token: str | None = None,
    ) -> ApiEnvelope:
        headers = {"Content-Type": "application/json", **self._auth_headers(token)}
        return self._send(method, path, headers=headers, params=params, json=payload)

    def request_form(
        self,
        method: str,
        path: str,
        data: Mapping[str, str],
        token: str | None = None,
    ) -> ApiEnvelope:
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            **self._auth_headers(token),
        }
        return self._send(method, path, headers=headers, data=dict(data))

    def request_multipart(
        self,
        method: str,
        path: str,
        fields: Mapping[str, str | Sequence[str]],
        files: Iterable[FilePart] = (),
        token: str | None = None,
    ) -> ApiEnvelope:
        # No Content-Type here: requests adds the multipart boundary itself.
        form_fields: list[tuple[str, str]] = []
        for name, value in fields.items():
            if isinstance(value, (list, tuple)):
                form_fields.extend((name, str(item)) for item in value)
            else:
                form_fields.append((name, str(value)))

        file_parts = [("files", part) for part in files]
        if not file_parts:
            # Force multipart encoding even without attachments.
            file_parts = [(name, (None, value)) for name, value in form_fields]
            form_fields = []

        return self._send(
            method,
            path,
            headers=self._auth_headers(token),
            data=form_fields or None,
            files=file_parts,
        )

    def _auth_headers(self, token: str | None) -> dict[str, str]:
        if not token:
            return {}
        scheme = self._settings.auth_scheme
        return {"Authorization": f"{scheme} {token}" if scheme else token}

    def _send(self, method: str, path: str, **kwargs: Any) -> ApiEnvelope:
        url = f"{self._settings.base_url}{path}"
        try:
            response = self._session.request(
                method,
                url,
                timeout=self._settings.timeout_seconds,
                **kwargs,
            )
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise ApiTransportError(f"{method} {path} failed: {exc}") from exc

        if not response.content:
            if response.ok:
                return ApiEnvelope.from_json({})
            raise ApiHttpError(
                status_code=response.status_code,
                message=f"HTTP {response.status_code}: empty response body",
            )

        try:
            payload = response.json()
        except ValueError as exc:
            message = response.text[:500]
            logger.warning("%s %s returned a non-JSON body (HTTP %s)", method, path, response.status_code)
            raise ApiHttpError(
                status_code=response.status_code,
                message=f"HTTP {response.status_code}: {message}",
            ) from exc

        envelope = ApiEnvelope.from_json(payload)
        logger.debug("%s %s -> HTTP %s, resultCode=%r", method, path, response.status_code, envelope.result_code)
        return envelope
