"""Request builder: tool parameters in, upstream HTTP requests out.

Every function here is pure. None of them touch the network or validate
values beyond what the parameter models already enforce; range checks on
limits, day counts and byte sizes are left to the upstream API.
"""

from typing import Any
from urllib.parse import quote

from .schemas import (
    CreateFileBatchParams,
    CreateUploadParams,
    CreateVectorStoreParams,
    FileBatchParams,
    FileIdParams,
    ListFileBatchFilesParams,
    ListFilesParams,
    ListVectorStoreFilesParams,
    ListVectorStoresParams,
    ModifyVectorStoreParams,
    OperationKind,
    ToolParams,
    UpdateVectorStoreFileParams,
    UpstreamRequest,
    VectorStoreFileParams,
    VectorStoreIdParams,
)


EXPIRATION_ANCHOR = "last_active_at"


def _segment(value: str) -> str:
    return quote(value, safe="")


def _store_path(vector_store_id: str, *parts: str) -> str:
    path = f"/vector_stores/{_segment(vector_store_id)}"
    for part in parts:
        path += f"/{part}"
    return path


def _query(params: ToolParams, *names: str) -> dict[str, str | int]:
    return params.explicit_fields(*names)


def expiration_policy(days: int) -> dict[str, Any]:
    """Expiration object for a day count. The anchor is always last activity."""
    return {"anchor": EXPIRATION_ANCHOR, "days": days}


def _store_body(params: CreateVectorStoreParams | ModifyVectorStoreParams) -> dict[str, Any]:
    body = params.explicit_fields("name", "metadata")
    days = params.explicit_fields("expires_after_days").get("expires_after_days")
    if days is not None:
        body["expires_after"] = expiration_policy(days)
    return body


# Vector stores

def build_create_vector_store(params: CreateVectorStoreParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.create,
        method="POST",
        path="/vector_stores",
        body=_store_body(params),
    )


def build_list_vector_stores(params: ListVectorStoresParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.list,
        method="GET",
        path="/vector_stores",
        query=_query(params, "limit", "order", "after"),
    )


def build_get_vector_store(params: VectorStoreIdParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.get,
        method="GET",
        path=_store_path(params.vector_store_id),
    )


def build_modify_vector_store(params: ModifyVectorStoreParams) -> UpstreamRequest:
    """Partial update: only fields present in the call are sent."""
    return UpstreamRequest(
        kind=OperationKind.modify,
        method="POST",
        path=_store_path(params.vector_store_id),
        body=_store_body(params),
    )


def build_delete_vector_store(params: VectorStoreIdParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.delete,
        method="DELETE",
        path=_store_path(params.vector_store_id),
    )


# Vector store files

def build_add_vector_store_file(params: VectorStoreFileParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.create,
        method="POST",
        path=_store_path(params.vector_store_id, "files"),
        body={"file_id": params.file_id},
    )


def build_list_vector_store_files(params: ListVectorStoreFilesParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.list,
        method="GET",
        path=_store_path(params.vector_store_id, "files"),
        query=_query(params, "limit", "order", "after", "filter"),
    )


def build_get_vector_store_file(params: VectorStoreFileParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.get,
        method="GET",
        path=_store_path(params.vector_store_id, "files", _segment(params.file_id)),
    )


def build_get_vector_store_file_content(params: VectorStoreFileParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.get,
        method="GET",
        path=_store_path(params.vector_store_id, "files", _segment(params.file_id), "content"),
    )


def build_update_vector_store_file(params: UpdateVectorStoreFileParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.modify,
        method="PATCH",
        path=_store_path(params.vector_store_id, "files", _segment(params.file_id)),
        body={"metadata": params.metadata},
    )


def build_delete_vector_store_file(params: VectorStoreFileParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.delete,
        method="DELETE",
        path=_store_path(params.vector_store_id, "files", _segment(params.file_id)),
    )


# File batches

def build_create_file_batch(params: CreateFileBatchParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.create,
        method="POST",
        path=_store_path(params.vector_store_id, "file_batches"),
        body={"file_ids": list(params.file_ids)},
    )


def build_get_file_batch(params: FileBatchParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.get,
        method="GET",
        path=_store_path(params.vector_store_id, "file_batches", _segment(params.batch_id)),
    )


def build_cancel_file_batch(params: FileBatchParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.cancel,
        method="POST",
        path=_store_path(params.vector_store_id, "file_batches", _segment(params.batch_id), "cancel"),
    )


def build_list_file_batch_files(params: ListFileBatchFilesParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.list,
        method="GET",
        path=_store_path(params.vector_store_id, "file_batches", _segment(params.batch_id), "files"),
        query=_query(params, "limit", "order", "after", "filter"),
    )


# Uploaded files

def build_list_files(params: ListFilesParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.list,
        method="GET",
        path="/files",
        query=_query(params, "purpose", "limit", "order", "after"),
    )


def build_get_file(params: FileIdParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.get,
        method="GET",
        path=f"/files/{_segment(params.file_id)}",
    )


def build_delete_file(params: FileIdParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.delete,
        method="DELETE",
        path=f"/files/{_segment(params.file_id)}",
    )


def build_get_file_content(params: FileIdParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.get,
        method="GET",
        path=f"/files/{_segment(params.file_id)}/content",
    )


def build_create_upload(params: CreateUploadParams) -> UpstreamRequest:
    return UpstreamRequest(
        kind=OperationKind.create,
        method="POST",
        path="/uploads",
        body={
            "filename": params.filename,
            "purpose": params.purpose,
            "bytes": params.bytes,
            "mime_type": params.mime_type,
        },
    )


def build_list_models() -> UpstreamRequest:
    """Read-only request used by the credential probe."""
    return UpstreamRequest(kind=OperationKind.list, method="GET", path="/models")
