import pytest

from dandi_query.core.config import GatewaySettings
from dandi_query.scripts import run_server


class RecordingLogger:
    def __init__(self) -> None:
        self.events: list[str] = []

    def info(self, event, **kwargs):
        self.events.append(event)


class InterruptedServer:
    def __init__(self) -> None:
        self.calls: list[dict] = []

    def run(self, **kwargs):
        self.calls.append(kwargs)
        raise KeyboardInterrupt


@pytest.fixture
def harness(monkeypatch):
    logger = RecordingLogger()
    server = InterruptedServer()
    settings = GatewaySettings(_env_file=None)

    monkeypatch.setattr(run_server, "get_settings", lambda: settings)
    monkeypatch.setattr(run_server, "configure_logging", lambda settings: None)
    monkeypatch.setattr(run_server, "get_logger", lambda name: logger)
    monkeypatch.setattr(run_server, "create_server", lambda settings: server)
    return settings, server, logger


def test_interrupt_exits_cleanly(harness):
    _, server, logger = harness

    run_server.main()

    assert server.calls == [{"transport": "stdio"}]
    assert logger.events == [
        "dandi_query_startup",
        "dandi_query_interrupted",
        "dandi_query_shutdown",
    ]


def test_http_transport_binds_host_and_port(harness):
    settings, server, logger = harness
    settings.mcp_transport = "streamable-http"
    settings.mcp_port = 9100

    run_server.main()

    assert server.calls == [
        {"transport": "streamable-http", "host": "127.0.0.1", "port": 9100}
    ]
    assert logger.events[-1] == "dandi_query_shutdown"
