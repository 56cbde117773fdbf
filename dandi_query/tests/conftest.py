from collections.abc import Callable

import httpx
import pytest

from dandi_query.core.config import GatewaySettings
from dandi_query.core.gateway import ToolGateway

from .fakes import FakeArchive

API_BASE = "http://archive.test"


@pytest.fixture
def settings() -> GatewaySettings:
    return GatewaySettings(_env_file=None, dandi_api_base=API_BASE, log_file=None)


@pytest.fixture
def make_gateway(settings):
    def factory(handler: Callable[[httpx.Request], httpx.Response]):
        archive = FakeArchive(handler)
        return ToolGateway.from_settings(settings, transport=archive.transport), archive

    return factory
