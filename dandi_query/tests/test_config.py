import pytest

from dandi_query.core.config import GatewaySettings


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in ("DANDI_API_BASE", "DANDI_API_TIMEOUT", "MCP_TRANSPORT", "LOG_FILE"):
        monkeypatch.delenv(name, raising=False)


def test_gateway_settings_defaults():
    settings = GatewaySettings(_env_file=None)

    assert settings.api_base_url == "http://localhost:8000/"
    assert settings.request_timeout == 30.0
    assert settings.mcp_transport == "stdio"
    assert settings.log_file is None


def test_gateway_settings_reads_env(monkeypatch):
    monkeypatch.setenv("DANDI_API_BASE", "https://dandi.example.org/query")
    monkeypatch.setenv("DANDI_API_TIMEOUT", "12.5")
    monkeypatch.setenv("MCP_TRANSPORT", "streamable-http")

    settings = GatewaySettings(_env_file=None)

    assert settings.api_base_url.startswith("https://dandi.example.org/query")
    assert settings.request_timeout == 12.5
    assert settings.mcp_transport == "streamable-http"


def test_gateway_settings_rejects_invalid_base_url():
    with pytest.raises(ValueError):
        GatewaySettings(_env_file=None, dandi_api_base="not a url")


def test_local_env_file_is_ignored_when_disabled(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("DANDI_API_BASE=http://from-dotenv.test\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert GatewaySettings(_env_file=None).api_base_url == "http://localhost:8000/"
    assert GatewaySettings().api_base_url == "http://from-dotenv.test/"
