from __future__ import annotations

import logging
from typing import Any, Callable

from egov_cms_client.http import ApiHttpError, ApiTransportError
from egov_cms_client.models import ApiEnvelope
from egov_cms_client.pages import messages
from egov_cms_client.pages.navigation import LOGIN_ROUTE, Navigator
from egov_cms_client.services import CmsService

logger = logging.getLogger(__name__)


class Page:
    """Shared plumbing for page controllers: status fields and call handling."""

    def __init__(self, service: CmsService, navigator: Navigator):
        self._service = service
        self._navigator = navigator
        self.loading = False
        self.error = ""
        self.success = ""

    @property
    def session(self):
        return self._service.session

    @property
    def ui(self):
        return self._service.ui

    def require_login(self) -> bool:
        if self.session.is_logged_in:
            return True
        self._navigator.alert(messages.LOGIN_REQUIRED)
        self._navigator.push(LOGIN_ROUTE)
        return False

    def _call(self, call: Callable[..., ApiEnvelope], *args: Any) -> ApiEnvelope | None:
        """Run a backend call; transport problems become the connection message."""
        try:
            return call(*args)
        except (ApiTransportError, ApiHttpError) as exc:
            logger.error("%s failed: %s", getattr(call, "__name__", "request"), exc)
            return None

    def _fail(self, envelope: ApiEnvelope | None, fallback: str, forbidden: str | None = None) -> None:
        if envelope is None:
            self.error = messages.CONNECTION_FAILED
        elif forbidden is not None and envelope.forbidden:
            self.error = forbidden
        else:
            self.error = envelope.message_or(fallback)
