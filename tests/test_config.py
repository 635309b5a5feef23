import pytest

from egov_cms_client.config import AppSettings, ConfigurationError

ENV_VARS = (
    "CMS_API_URL",
    "CMS_TIMEOUT_SECONDS",
    "CMS_AUTH_SCHEME",
    "CMS_STORAGE_PATH",
    "CMS_LOG_LEVEL",
    "CMS_TOAST_DURATION_MS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        # setenv first so values written by the .env loader are undone too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv("CMS_ENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.chdir(tmp_path)


def test_defaults():
    settings = AppSettings.from_env()

    assert settings.base_url == "http://localhost:8080"
    assert settings.timeout_seconds is None
    assert settings.auth_scheme == ""
    assert settings.log_level == "INFO"
    assert settings.toast_duration_ms == 3000
    assert settings.storage_path.endswith("auth-storage.json")


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("CMS_API_URL", "https://cms.example.org/api/")
    monkeypatch.setenv("CMS_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("CMS_AUTH_SCHEME", "Bearer")
    monkeypatch.setenv("CMS_LOG_LEVEL", "debug")

    settings = AppSettings.from_env()

    assert settings.base_url == "https://cms.example.org/api"
    assert settings.timeout_seconds == 12.5
    assert settings.auth_scheme == "Bearer"
    assert settings.log_level == "DEBUG"


def test_env_file_values_do_not_override_environment(monkeypatch, tmp_path):
    env_file = tmp_path / "custom.env"
    env_file.write_text('CMS_API_URL="http://from-file:9000"\nCMS_TOAST_DURATION_MS=500\n', encoding="utf-8")
    monkeypatch.setenv("CMS_ENV_FILE", str(env_file))
    monkeypatch.setenv("CMS_TOAST_DURATION_MS", "1000")

    settings = AppSettings.from_env()

    assert settings.base_url == "http://from-file:9000"
    assert settings.toast_duration_ms == 1000


@pytest.mark.parametrize(
    "name,value",
    [
        ("CMS_API_URL", "localhost:8080"),
        ("CMS_TIMEOUT_SECONDS", "0"),
        ("CMS_TIMEOUT_SECONDS", "soon"),
        ("CMS_LOG_LEVEL", "LOUD"),
        ("CMS_TOAST_DURATION_MS", "-1"),
    ],
)
def test_invalid_values_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError):
        AppSettings.from_env()
