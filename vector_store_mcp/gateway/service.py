"""Gateway service: one coroutine per vector store operation."""

import httpx
import structlog
from pydantic import ValidationError

from . import builder
from .batch import FileBatchSnapshot
from .errors import ErrorKind, UpstreamError
from .schemas import (
    CreateFileBatchParams,
    CreateUploadParams,
    CreateVectorStoreParams,
    FileBatchParams,
    FileIdParams,
    GatewayFailure,
    GatewayResult,
    GatewaySuccess,
    ListFileBatchFilesParams,
    ListFilesParams,
    ListPage,
    ListVectorStoreFilesParams,
    ListVectorStoresParams,
    ModifyVectorStoreParams,
    UpdateVectorStoreFileParams,
    UploadFileParams,
    UpstreamRequest,
    VectorStoreFileParams,
    VectorStoreIdParams,
)
from .transport import GatewayConfig, UpstreamTransport


logger = structlog.get_logger("gateway")

LOCAL_UPLOAD_UNSUPPORTED = (
    "File upload from the local filesystem is not supported by this server. "
    "Upload the file through the OpenAI API or web interface instead."
)
LOCAL_UPLOAD_SUGGESTION = (
    "Upload the file with the OpenAI web interface or API, then pass the "
    "returned file ID to the vector store tools."
)


class VectorStoreGateway:
    """Translates typed operations into upstream calls.

    Each instance is bound to one immutable GatewayConfig, so gateways
    with different credentials can live side by side in one process.
    Every method issues at most one upstream request and never raises
    for upstream failures; those come back as GatewayFailure.
    """

    def __init__(self, config: GatewayConfig, client: httpx.AsyncClient):
        self._transport = UpstreamTransport(config, client)

    @property
    def config(self) -> GatewayConfig:
        return self._transport.config

    async def _send(self, request: UpstreamRequest) -> GatewayResult:
        return await self._transport.send(request)

    async def _send_batch(self, request: UpstreamRequest) -> GatewayResult:
        result = await self._send(request)
        if isinstance(result, GatewaySuccess):
            _log_batch_snapshot(result)
        return result

    # Vector stores

    async def create_vector_store(self, params: CreateVectorStoreParams) -> GatewayResult:
        return await self._send(builder.build_create_vector_store(params))

    async def list_vector_stores(self, params: ListVectorStoresParams) -> GatewayResult:
        result = await self._send(builder.build_list_vector_stores(params))
        _log_page("vector_stores", result)
        return result

    async def get_vector_store(self, params: VectorStoreIdParams) -> GatewayResult:
        return await self._send(builder.build_get_vector_store(params))

    async def modify_vector_store(self, params: ModifyVectorStoreParams) -> GatewayResult:
        return await self._send(builder.build_modify_vector_store(params))

    async def delete_vector_store(self, params: VectorStoreIdParams) -> GatewayResult:
        return await self._send(builder.build_delete_vector_store(params))

    # Vector store files

    async def add_vector_store_file(self, params: VectorStoreFileParams) -> GatewayResult:
        return await self._send(builder.build_add_vector_store_file(params))

    async def list_vector_store_files(self, params: ListVectorStoreFilesParams) -> GatewayResult:
        result = await self._send(builder.build_list_vector_store_files(params))
        _log_page("vector_store_files", result)
        return result

    async def get_vector_store_file(self, params: VectorStoreFileParams) -> GatewayResult:
        return await self._send(builder.build_get_vector_store_file(params))

    async def get_vector_store_file_content(self, params: VectorStoreFileParams) -> GatewayResult:
        return await self._send(builder.build_get_vector_store_file_content(params))

    async def update_vector_store_file(self, params: UpdateVectorStoreFileParams) -> GatewayResult:
        return await self._send(builder.build_update_vector_store_file(params))

    async def delete_vector_store_file(self, params: VectorStoreFileParams) -> GatewayResult:
        return await self._send(builder.build_delete_vector_store_file(params))

    # File batches

    async def create_file_batch(self, params: CreateFileBatchParams) -> GatewayResult:
        return await self._send_batch(builder.build_create_file_batch(params))

    async def get_file_batch(self, params: FileBatchParams) -> GatewayResult:
        """Return a point-in-time snapshot of the batch. Never waits."""
        return await self._send_batch(builder.build_get_file_batch(params))

    async def cancel_file_batch(self, params: FileBatchParams) -> GatewayResult:
        """Forward a cancel request regardless of the batch's current status."""
        return await self._send_batch(builder.build_cancel_file_batch(params))

    async def list_file_batch_files(self, params: ListFileBatchFilesParams) -> GatewayResult:
        result = await self._send(builder.build_list_file_batch_files(params))
        _log_page("file_batch_files", result)
        return result

    # Uploaded files

    async def upload_file(self, params: UploadFileParams) -> GatewayResult:
        """Local filesystem uploads are unsupported; fails without a request."""
        return GatewayFailure(
            error=UpstreamError(
                kind=ErrorKind.INTERNAL,
                message=LOCAL_UPLOAD_UNSUPPORTED,
                details={
                    "suggestion": LOCAL_UPLOAD_SUGGESTION,
                    "file_path": params.file_path,
                },
            )
        )

    async def list_files(self, params: ListFilesParams) -> GatewayResult:
        result = await self._send(builder.build_list_files(params))
        _log_page("files", result)
        return result

    async def get_file(self, params: FileIdParams) -> GatewayResult:
        return await self._send(builder.build_get_file(params))

    async def delete_file(self, params: FileIdParams) -> GatewayResult:
        return await self._send(builder.build_delete_file(params))

    async def get_file_content(self, params: FileIdParams) -> GatewayResult:
        return await self._send(builder.build_get_file_content(params))

    async def create_upload(self, params: CreateUploadParams) -> GatewayResult:
        return await self._send(builder.build_create_upload(params))

    # Credential probe

    async def validate_api_key(self) -> bool:
        """Return True if the configured credential is accepted upstream."""
        return await self._transport.probe()


def _log_batch_snapshot(result: GatewaySuccess) -> None:
    try:
        snapshot = result.as_model(FileBatchSnapshot)
    except ValidationError:
        logger.warning("file_batch_unparsed", operation=result.kind.value)
        return
    logger.info(
        "file_batch_snapshot",
        operation=result.kind.value,
        batch_id=snapshot.id,
        status=snapshot.status.value,
        terminal=snapshot.is_terminal,
        total=snapshot.file_counts.total,
        completed=snapshot.file_counts.completed,
        failed=snapshot.file_counts.failed,
    )


def _log_page(resource: str, result: GatewayResult) -> None:
    if not isinstance(result, GatewaySuccess):
        return
    try:
        page = result.as_model(ListPage[dict])
    except ValidationError:
        return
    logger.debug(
        "listed",
        resource=resource,
        count=len(page.data),
        has_more=page.has_more,
        next_cursor=page.next_cursor,
    )
