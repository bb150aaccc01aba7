"""Unit tests for the request builder."""

import pytest
from pydantic import ValidationError

from vector_store_mcp.gateway import builder
from vector_store_mcp.gateway.schemas import (
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
    UpdateVectorStoreFileParams,
    VectorStoreFileParams,
    VectorStoreIdParams,
)


class TestExpiration:
    """Tests for the expiration policy."""

    @pytest.mark.parametrize("days", [1, 7, 365])
    def test_anchor_is_last_active(self, days):
        """Expiration always anchors on last activity."""
        assert builder.expiration_policy(days) == {"anchor": "last_active_at", "days": days}

    def test_create_with_days(self):
        request = builder.build_create_vector_store(
            CreateVectorStoreParams(name="docs", expires_after_days=7)
        )
        assert request.body == {
            "name": "docs",
            "expires_after": {"anchor": "last_active_at", "days": 7},
        }

    def test_create_without_days_has_no_expiration(self):
        request = builder.build_create_vector_store(CreateVectorStoreParams(name="docs"))
        assert request.body == {"name": "docs"}
        assert "expires_after" not in request.body

    def test_days_not_range_checked(self):
        """Out-of-range values are left for the upstream to reject."""
        request = builder.build_create_vector_store(
            CreateVectorStoreParams(name="docs", expires_after_days=0)
        )
        assert request.body["expires_after"]["days"] == 0


class TestVectorStoreRequests:
    """Tests for vector store request shapes."""

    def test_create(self):
        request = builder.build_create_vector_store(
            CreateVectorStoreParams(name="docs", metadata={"team": "search"})
        )
        assert request.kind == OperationKind.create
        assert request.method == "POST"
        assert request.path == "/vector_stores"
        assert request.body == {"name": "docs", "metadata": {"team": "search"}}

    def test_list_without_filters_sends_no_query(self):
        request = builder.build_list_vector_stores(ListVectorStoresParams())
        assert request.method == "GET"
        assert request.query == {}
        assert request.body is None

    def test_list_sends_exactly_supplied_filters(self):
        request = builder.build_list_vector_stores(
            ListVectorStoresParams(limit=5, after="vs_9")
        )
        assert request.query == {"limit": 5, "after": "vs_9"}

    def test_list_drops_null_filters(self):
        request = builder.build_list_vector_stores(
            ListVectorStoresParams.model_validate({"limit": None, "order": "asc"})
        )
        assert request.query == {"order": "asc"}

    def test_list_rejects_unknown_order(self):
        with pytest.raises(ValidationError):
            ListVectorStoresParams(order="sideways")

    def test_get_and_delete_paths(self):
        params = VectorStoreIdParams(vector_store_id="vs_1")
        get = builder.build_get_vector_store(params)
        delete = builder.build_delete_vector_store(params)
        assert (get.method, get.path, get.kind) == ("GET", "/vector_stores/vs_1", OperationKind.get)
        assert (delete.method, delete.path, delete.kind) == (
            "DELETE", "/vector_stores/vs_1", OperationKind.delete,
        )

    def test_ids_are_path_encoded(self):
        request = builder.build_get_vector_store(VectorStoreIdParams(vector_store_id="vs/../x"))
        assert request.path == "/vector_stores/vs%2F..%2Fx"

    def test_missing_id_rejected(self):
        with pytest.raises(ValidationError):
            VectorStoreIdParams(vector_store_id="")
        with pytest.raises(ValidationError):
            VectorStoreIdParams.model_validate({})


class TestModifyVectorStore:
    """Tests for partial updates."""

    def test_only_name(self):
        request = builder.build_modify_vector_store(
            ModifyVectorStoreParams(vector_store_id="vs_1", name="renamed")
        )
        assert request.method == "POST"
        assert request.path == "/vector_stores/vs_1"
        assert request.body == {"name": "renamed"}

    def test_only_expiration(self):
        request = builder.build_modify_vector_store(
            ModifyVectorStoreParams(vector_store_id="vs_1", expires_after_days=30)
        )
        assert request.body == {"expires_after": {"anchor": "last_active_at", "days": 30}}

    def test_no_fields_sends_empty_body(self):
        request = builder.build_modify_vector_store(ModifyVectorStoreParams(vector_store_id="vs_1"))
        assert request.body == {}

    def test_explicit_nulls_not_sent(self):
        params = ModifyVectorStoreParams.model_validate(
            {"vector_store_id": "vs_1", "name": None, "metadata": {"a": "b"}}
        )
        request = builder.build_modify_vector_store(params)
        assert request.body == {"metadata": {"a": "b"}}


class TestVectorStoreFileRequests:
    """Tests for file-in-store request shapes."""

    def test_add(self):
        request = builder.build_add_vector_store_file(
            VectorStoreFileParams(vector_store_id="vs_1", file_id="file_1")
        )
        assert request.method == "POST"
        assert request.path == "/vector_stores/vs_1/files"
        assert request.body == {"file_id": "file_1"}

    def test_list_with_filter(self):
        request = builder.build_list_vector_store_files(
            ListVectorStoreFilesParams(vector_store_id="vs_1", filter="completed", limit=10)
        )
        assert request.path == "/vector_stores/vs_1/files"
        assert request.query == {"limit": 10, "filter": "completed"}

    def test_get_content_and_delete(self):
        params = VectorStoreFileParams(vector_store_id="vs_1", file_id="file_1")
        assert builder.build_get_vector_store_file(params).path == "/vector_stores/vs_1/files/file_1"
        assert (
            builder.build_get_vector_store_file_content(params).path
            == "/vector_stores/vs_1/files/file_1/content"
        )
        delete = builder.build_delete_vector_store_file(params)
        assert delete.method == "DELETE"
        assert delete.body is None

    def test_update_sends_metadata(self):
        request = builder.build_update_vector_store_file(
            UpdateVectorStoreFileParams(
                vector_store_id="vs_1", file_id="file_1", metadata={"lang": "en"}
            )
        )
        assert request.method == "PATCH"
        assert request.body == {"metadata": {"lang": "en"}}


class TestFileBatchRequests:
    """Tests for file batch request shapes."""

    def test_create(self):
        request = builder.build_create_file_batch(
            CreateFileBatchParams(vector_store_id="vs_1", file_ids=["f1", "f2"])
        )
        assert request.path == "/vector_stores/vs_1/file_batches"
        assert request.body == {"file_ids": ["f1", "f2"]}

    def test_cancel_has_no_body(self):
        request = builder.build_cancel_file_batch(
            FileBatchParams(vector_store_id="vs_1", batch_id="vsfb_1")
        )
        assert request.kind == OperationKind.cancel
        assert request.method == "POST"
        assert request.path == "/vector_stores/vs_1/file_batches/vsfb_1/cancel"
        assert request.body is None

    def test_list_files(self):
        request = builder.build_list_file_batch_files(
            ListFileBatchFilesParams(vector_store_id="vs_1", batch_id="vsfb_1", filter="failed")
        )
        assert request.path == "/vector_stores/vs_1/file_batches/vsfb_1/files"
        assert request.query == {"filter": "failed"}


class TestFileRequests:
    """Tests for uploaded file and upload session request shapes."""

    def test_list_files_by_purpose(self):
        request = builder.build_list_files(ListFilesParams(purpose="assistants"))
        assert request.path == "/files"
        assert request.query == {"purpose": "assistants"}

    def test_file_content_path(self):
        request = builder.build_get_file_content(FileIdParams(file_id="file_1"))
        assert (request.method, request.path) == ("GET", "/files/file_1/content")
        assert request.body is None

    def test_create_upload_defaults_purpose(self):
        request = builder.build_create_upload(
            CreateUploadParams(filename="big.pdf", bytes=30_000_000, mime_type="application/pdf")
        )
        assert request.path == "/uploads"
        assert request.body == {
            "filename": "big.pdf",
            "purpose": "assistants",
            "bytes": 30_000_000,
            "mime_type": "application/pdf",
        }

    def test_list_models(self):
        request = builder.build_list_models()
        assert (request.method, request.path) == ("GET", "/models")

    def test_delete_file(self):
        request = builder.build_delete_file(FileIdParams(file_id="file_1"))
        assert (request.method, request.path, request.kind) == (
            "DELETE", "/files/file_1", OperationKind.delete,
        )
