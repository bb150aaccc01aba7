# Test configuration
import sys
from pathlib import Path

import httpx
import pytest

REPO_ROOT = Path(__file__).parent.parent

# Add repo root to path so tests can import modules
sys.path.insert(0, str(REPO_ROOT))

from vector_store_mcp.gateway.service import VectorStoreGateway  # noqa: E402
from vector_store_mcp.gateway.transport import GatewayConfig  # noqa: E402


class RecordingUpstream:
    """Scripted upstream for httpx.MockTransport.

    Responses are returned in order; every request is recorded.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def gateway_config() -> GatewayConfig:
    return GatewayConfig(api_key="sk-test", base_url="https://api.test/v1")


@pytest.fixture
def make_gateway(gateway_config):
    """Build a gateway whose HTTP client is backed by a RecordingUpstream."""

    def _make(*responses) -> tuple[VectorStoreGateway, RecordingUpstream]:
        upstream = RecordingUpstream(*responses)
        client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
        return VectorStoreGateway(gateway_config, client), upstream

    return _make
