"""HTTP transport to the upstream API and normalization of its failures."""

from typing import Any

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, SecretStr

from .builder import build_list_models
from .errors import ErrorKind, UpstreamError, classify_status
from .schemas import GatewayFailure, GatewayResult, GatewaySuccess, UpstreamRequest


logger = structlog.get_logger("gateway.transport")

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_BETA_HEADER = "assistants=v2"

# Methods whose request carries a JSON body
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


class GatewayConfig(BaseModel):
    """Immutable connection settings for one gateway instance.

    Attributes:
        api_key: Bearer credential for the upstream API.
        base_url: API root, without trailing slash.
        beta_header: Value of the ``OpenAI-Beta`` feature header.
    """

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr
    base_url: str = DEFAULT_BASE_URL
    beta_header: str = DEFAULT_BETA_HEADER

    def url_for(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{path}"

    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key.get_secret_value()}",
            "Content-Type": "application/json",
            "OpenAI-Beta": self.beta_header,
        }


def _upstream_message(payload: Any) -> str | None:
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return None


def _network_failure(exc: Exception) -> GatewayFailure:
    return GatewayFailure(
        error=UpstreamError(
            kind=ErrorKind.INTERNAL,
            message=f"Network error: {exc}",
            details={"original_error": repr(exc), "error_type": type(exc).__name__},
        )
    )


def normalize_error_response(response: httpx.Response) -> UpstreamError:
    """Classify a non-2xx upstream response.

    Args:
        response: The failed HTTP response.

    Returns:
        UpstreamError whose message prefers the upstream's own text.
    """
    try:
        payload = response.json()
    except ValueError:
        payload = {}

    message = _upstream_message(payload) or (
        f"API error: {response.status_code} {response.reason_phrase}"
    )
    return UpstreamError(
        kind=classify_status(response.status_code),
        message=message,
        status_code=response.status_code,
        details=payload,
    )


class UpstreamTransport:
    """Performs exactly one authenticated request per call.

    The transport holds no mutable state. The HTTP client is borrowed and
    never closed here; its own defaults govern request lifetime.
    """

    def __init__(self, config: GatewayConfig, client: httpx.AsyncClient):
        self._config = config
        self._client = client

    @property
    def config(self) -> GatewayConfig:
        return self._config

    async def _request(self, request: UpstreamRequest) -> httpx.Response:
        kwargs: dict[str, Any] = {"headers": self._config.headers()}
        if request.query:
            kwargs["params"] = request.query
        if request.method in BODY_METHODS and request.body is not None:
            kwargs["json"] = request.body
        return await self._client.request(
            request.method,
            self._config.url_for(request.path),
            **kwargs,
        )

    async def send(self, request: UpstreamRequest) -> GatewayResult:
        """Send a built request and classify the outcome.

        Args:
            request: Request produced by the builder.

        Returns:
            GatewaySuccess with the upstream JSON verbatim, or
            GatewayFailure with a classified UpstreamError.
        """
        logger.debug(
            "upstream_request",
            kind=request.kind.value,
            method=request.method,
            path=request.path,
        )
        try:
            response = await self._request(request)
        except httpx.RequestError as e:
            logger.warning(
                "upstream_network_error",
                method=request.method,
                path=request.path,
                error=str(e),
            )
            return _network_failure(e)

        if not response.is_success:
            error = normalize_error_response(response)
            logger.info(
                "upstream_error",
                method=request.method,
                path=request.path,
                status_code=response.status_code,
                kind=error.kind.value,
            )
            return GatewayFailure(error=error)

        try:
            data = response.json()
        except ValueError as e:
            # Undecodable 2xx bodies count as a failed exchange
            return _network_failure(e)
        return GatewaySuccess(kind=request.kind, data=data)

    async def probe(self) -> bool:
        """Check whether the credential is accepted.

        Issues a single read-only request. Any non-2xx status or network
        failure counts as "not usable"; nothing is classified or raised.
        """
        try:
            response = await self._request(build_list_models())
        except httpx.RequestError as e:
            logger.info("credential_probe", valid=False, error=str(e))
            return False
        valid = response.is_success
        logger.info("credential_probe", valid=valid, status_code=response.status_code)
        return valid
