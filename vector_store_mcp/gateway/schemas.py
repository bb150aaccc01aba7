"""Pydantic schemas for tool parameters, upstream requests and results."""

from enum import Enum
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .errors import UpstreamError


SortOrder = Literal["asc", "desc"]
FileStatusFilter = Literal["in_progress", "completed", "failed", "cancelled"]


# ---------------------------------------------------------------------------
# Tool parameters
# ---------------------------------------------------------------------------

class ToolParams(BaseModel):
    """Base class for validated tool arguments.

    Unknown argument keys are ignored so that clients sending extra
    hints do not fail validation.
    """

    model_config = ConfigDict(extra="ignore")

    def explicit_fields(self, *names: str) -> dict[str, Any]:
        """Return the named fields the caller actually supplied.

        A field counts as supplied when it was present in the input and is
        not None. Omitted fields are never reported, not even as None.
        """
        return {
            name: getattr(self, name)
            for name in names
            if name in self.model_fields_set and getattr(self, name) is not None
        }


class VectorStoreIdParams(ToolParams):
    vector_store_id: str = Field(..., min_length=1, description="ID of the vector store")


class CreateVectorStoreParams(ToolParams):
    name: str = Field(..., min_length=1, description="Name of the vector store")
    expires_after_days: int | None = Field(
        default=None,
        description="Days of inactivity after which the vector store expires",
    )
    metadata: dict[str, Any] | None = Field(
        default=None, description="Key/value metadata for the vector store"
    )


class ListVectorStoresParams(ToolParams):
    limit: int | None = Field(default=None, description="Maximum number of vector stores to return")
    order: SortOrder | None = Field(default=None, description="Sort order by created_at")
    after: str | None = Field(default=None, description="Cursor: ID of the last item of the previous page")


class ModifyVectorStoreParams(VectorStoreIdParams):
    name: str | None = Field(default=None, description="New name for the vector store")
    expires_after_days: int | None = Field(
        default=None,
        description="Days of inactivity after which the vector store expires",
    )
    metadata: dict[str, Any] | None = Field(
        default=None, description="Replacement metadata for the vector store"
    )


class VectorStoreFileParams(VectorStoreIdParams):
    file_id: str = Field(..., min_length=1, description="ID of the file")


class UpdateVectorStoreFileParams(VectorStoreFileParams):
    metadata: dict[str, Any] = Field(..., description="New metadata for the file")


class ListVectorStoreFilesParams(VectorStoreIdParams):
    limit: int | None = Field(default=None, description="Maximum number of files to return")
    order: SortOrder | None = Field(default=None, description="Sort order by created_at")
    after: str | None = Field(default=None, description="Cursor: ID of the last item of the previous page")
    filter: FileStatusFilter | None = Field(default=None, description="Filter files by status")


class CreateFileBatchParams(VectorStoreIdParams):
    file_ids: list[str] = Field(..., description="IDs of the files to attach in one batch")


class FileBatchParams(VectorStoreIdParams):
    batch_id: str = Field(..., min_length=1, description="ID of the file batch")


class ListFileBatchFilesParams(FileBatchParams):
    limit: int | None = Field(default=None, description="Maximum number of files to return")
    order: SortOrder | None = Field(default=None, description="Sort order by created_at")
    after: str | None = Field(default=None, description="Cursor: ID of the last item of the previous page")
    filter: FileStatusFilter | None = Field(default=None, description="Filter files by status")


class UploadFileParams(ToolParams):
    file_path: str = Field(..., min_length=1, description="Path to the local file to upload")
    purpose: str | None = Field(default=None, description="Purpose of the upload, e.g. 'assistants'")
    filename: str | None = Field(default=None, description="Optional custom filename")


class ListFilesParams(ToolParams):
    purpose: str | None = Field(default=None, description="Only return files with this purpose")
    limit: int | None = Field(default=None, description="Maximum number of files to return")
    order: SortOrder | None = Field(default=None, description="Sort order by created_at")
    after: str | None = Field(default=None, description="Cursor: ID of the last item of the previous page")


class FileIdParams(ToolParams):
    file_id: str = Field(..., min_length=1, description="ID of the uploaded file")


class CreateUploadParams(ToolParams):
    filename: str = Field(..., min_length=1, description="Name of the file to upload")
    bytes: int = Field(..., description="Total size of the file in bytes")
    mime_type: str = Field(..., min_length=1, description="MIME type of the file")
    purpose: str = Field(default="assistants", description="Purpose of the upload")


# ---------------------------------------------------------------------------
# Outbound request
# ---------------------------------------------------------------------------

class OperationKind(str, Enum):
    """Operation family an upstream request belongs to."""

    create = "create"
    list = "list"
    get = "get"
    delete = "delete"
    modify = "modify"
    cancel = "cancel"


class UpstreamRequest(BaseModel):
    """A fully built upstream HTTP request.

    Attributes:
        kind: Operation family, used for logging and result tagging.
        method: HTTP method.
        path: Path relative to the API base URL.
        query: Query parameters; only caller-supplied filters appear here.
        body: JSON body, or None for requests that carry none.
    """

    model_config = ConfigDict(frozen=True)

    kind: OperationKind
    method: Literal["GET", "POST", "PATCH", "DELETE"]
    path: str
    query: dict[str, str | int] = Field(default_factory=dict)
    body: dict[str, Any] | None = None


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=BaseModel)


class GatewaySuccess(BaseModel):
    """Successful upstream call; ``data`` is the upstream JSON verbatim."""

    ok: Literal[True] = True
    kind: OperationKind
    data: Any

    def as_model(self, model: type[ModelT]) -> ModelT:
        """Parse the payload into a snapshot model."""
        return model.model_validate(self.data)


class GatewayFailure(BaseModel):
    """Failed call carrying a classified error."""

    ok: Literal[False] = False
    error: UpstreamError


GatewayResult = GatewaySuccess | GatewayFailure


# ---------------------------------------------------------------------------
# Snapshots of upstream resources
# ---------------------------------------------------------------------------

class Snapshot(BaseModel):
    """Read-only view of an upstream resource; unknown fields are kept."""

    model_config = ConfigDict(extra="allow", frozen=True)


class FileCounts(Snapshot):
    in_progress: int = 0
    completed: int = 0
    failed: int = 0
    cancelled: int = 0
    total: int = 0


class ExpiresAfter(Snapshot):
    anchor: Literal["last_active_at"] = "last_active_at"
    days: int


class VectorStore(Snapshot):
    id: str
    object: str = "vector_store"
    name: str | None = None
    status: str | None = None
    created_at: int | None = None
    last_active_at: int | None = None
    usage_bytes: int | None = None
    file_counts: FileCounts | None = None
    expires_after: ExpiresAfter | None = None
    expires_at: int | None = None
    metadata: dict[str, Any] | None = None


class VectorStoreFile(Snapshot):
    id: str
    object: str = "vector_store.file"
    vector_store_id: str | None = None
    status: str | None = None
    usage_bytes: int | None = None
    created_at: int | None = None
    last_error: dict[str, Any] | None = None


class UploadedFile(Snapshot):
    id: str
    object: str = "file"
    purpose: str | None = None
    filename: str | None = None
    bytes: int | None = None
    created_at: int | None = None


class DeletionStatus(Snapshot):
    id: str
    object: str | None = None
    deleted: bool


ItemT = TypeVar("ItemT")


class ListPage(Snapshot, Generic[ItemT]):
    """One page of a cursor-paginated listing."""

    object: str = "list"
    data: list[ItemT] = Field(default_factory=list)
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool = False

    @property
    def next_cursor(self) -> str | None:
        """Value to pass as ``after`` for the next page, if there is one."""
        return self.last_id if self.has_more else None
