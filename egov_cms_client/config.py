from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import sys
from urllib.parse import urlparse


class ConfigurationError(ValueError):
    pass


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class AppSettings:
    base_url: str
    timeout_seconds: float | None
    auth_scheme: str
    storage_path: str
    log_level: str
    toast_duration_ms: int

    @staticmethod
    def from_env() -> "AppSettings":
        _load_dotenv_if_present()

        base_url = os.getenv("CMS_API_URL", "http://localhost:8080").strip().rstrip("/")

        raw_timeout = os.getenv("CMS_TIMEOUT_SECONDS", "").strip()
        try:
            timeout_seconds = float(raw_timeout) if raw_timeout else None
        except ValueError as error:
            raise ConfigurationError("CMS_TIMEOUT_SECONDS must be a number") from error

        auth_scheme = os.getenv("CMS_AUTH_SCHEME", "").strip()

        default_storage_path = os.path.join(
            os.getenv("LOCALAPPDATA", os.getcwd()),
            "EgovCmsClient",
            "auth-storage.json",
        )
        storage_path = os.getenv("CMS_STORAGE_PATH", default_storage_path)
        log_level = os.getenv("CMS_LOG_LEVEL", "INFO").strip().upper()

        try:
            toast_duration_ms = int(os.getenv("CMS_TOAST_DURATION_MS", "3000"))
        except ValueError as error:
            raise ConfigurationError("CMS_TOAST_DURATION_MS must be an integer") from error

        settings = AppSettings(
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            auth_scheme=auth_scheme,
            storage_path=storage_path,
            log_level=log_level,
            toast_duration_ms=toast_duration_ms,
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(
                f"CMS_API_URL must be an http(s) URL, got {self.base_url!r}"
            )

        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ConfigurationError("CMS_TIMEOUT_SECONDS must be greater than 0")

        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                "CMS_LOG_LEVEL must be one of: " + ", ".join(VALID_LOG_LEVELS)
            )

        if self.toast_duration_ms < 0:
            raise ConfigurationError("CMS_TOAST_DURATION_MS must be 0 or greater")


def _load_dotenv_if_present(file_name: str = ".env") -> None:
    for candidate in _candidate_env_files(file_name):
        _load_env_file(candidate)


def _candidate_env_files(file_name: str) -> list[Path]:
    candidates: list[Path] = []

    explicit = os.getenv("CMS_ENV_FILE", "").strip()
    if explicit:
        candidates.append(Path(explicit).expanduser())

    candidates.append(Path.cwd() / file_name)

    if getattr(sys, "frozen", False):
        candidates.append(Path(sys.executable).resolve().parent / file_name)
    else:
        candidates.append(Path(__file__).resolve().parent.parent / file_name)

    unique_candidates: list[Path] = []
    seen: set[str] = set()
    for path in candidates:
        normalized = str(path.resolve()) if path.exists() else str(path)
        if normalized in seen:
            continue
        seen.add(normalized)
        unique_candidates.append(path)
    return unique_candidates


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return

    try:
        with path.open("r", encoding="utf-8") as env_file:
            for raw_line in env_file:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")

                if key and key not in os.environ:
                    os.environ[key] = value
    except OSError:
        return
