"""Tool catalogue exposed over MCP.

Each tool binds a name and description to a parameter model and the
VectorStoreGateway coroutine that serves it. Input schemas are derived
from the parameter models so validation and advertised schema agree.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from vector_store_mcp.gateway.exceptions import InvalidToolArgumentsError, ToolNotFoundError
from vector_store_mcp.gateway.schemas import (
    CreateFileBatchParams,
    CreateUploadParams,
    CreateVectorStoreParams,
    FileBatchParams,
    FileIdParams,
    GatewayResult,
    ListFileBatchFilesParams,
    ListFilesParams,
    ListVectorStoreFilesParams,
    ListVectorStoresParams,
    ModifyVectorStoreParams,
    ToolParams,
    UpdateVectorStoreFileParams,
    UploadFileParams,
    VectorStoreFileParams,
    VectorStoreIdParams,
)
from vector_store_mcp.gateway.service import VectorStoreGateway

from .schemas import MCPTool


@dataclass(frozen=True)
class ToolDefinition:
    """A single MCP tool.

    Attributes:
        name: Tool name as seen by MCP clients.
        description: Human-readable description.
        params_model: Pydantic model validating the tool arguments.
        operation: Name of the VectorStoreGateway coroutine to call.
    """

    name: str
    description: str
    params_model: type[ToolParams]
    operation: str

    def to_mcp_tool(self) -> MCPTool:
        return MCPTool(
            name=self.name,
            description=self.description,
            inputSchema=input_schema_for(self.params_model),
        )

    def parse_arguments(self, arguments: dict[str, Any]) -> ToolParams:
        """Validate raw arguments.

        Raises:
            InvalidToolArgumentsError: If a required field is missing or
                a value has the wrong type.
        """
        try:
            return self.params_model.model_validate(arguments)
        except ValidationError as e:
            raise InvalidToolArgumentsError(self.name, _describe_validation_error(e)) from e

    async def invoke(self, gateway: VectorStoreGateway, params: ToolParams) -> GatewayResult:
        return await getattr(gateway, self.operation)(params)


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "arguments"
        if error["type"] == "missing":
            problems.append(f"{field} is required")
        else:
            problems.append(f"{field}: {error['msg']}")
    return "; ".join(problems)


def input_schema_for(model: type[BaseModel]) -> dict[str, Any]:
    """Build a compact JSON schema for a parameter model.

    Optional fields are flattened from ``anyOf [T, null]`` to ``T`` and
    pydantic's generated titles are dropped.
    """
    schema = model.model_json_schema()
    properties: dict[str, Any] = {}
    for name, prop in schema.get("properties", {}).items():
        prop = {key: value for key, value in prop.items() if key != "title"}
        variants = prop.pop("anyOf", None)
        if variants:
            non_null = [v for v in variants if v.get("type") != "null"]
            if len(non_null) == 1:
                prop.update(non_null[0])
            else:
                prop["anyOf"] = non_null
        if "default" in prop and prop["default"] is None:
            del prop["default"]
        properties[name] = prop

    result: dict[str, Any] = {"type": "object", "properties": properties}
    if schema.get("required"):
        result["required"] = list(schema["required"])
    return result


TOOLS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name="vector-store-create",
        description="Create a new vector store",
        params_model=CreateVectorStoreParams,
        operation="create_vector_store",
    ),
    ToolDefinition(
        name="vector-store-list",
        description="List vector stores, newest first unless order is given",
        params_model=ListVectorStoresParams,
        operation="list_vector_stores",
    ),
    ToolDefinition(
        name="vector-store-get",
        description="Get details of a specific vector store",
        params_model=VectorStoreIdParams,
        operation="get_vector_store",
    ),
    ToolDefinition(
        name="vector-store-delete",
        description="Delete a vector store",
        params_model=VectorStoreIdParams,
        operation="delete_vector_store",
    ),
    ToolDefinition(
        name="vector-store-modify",
        description="Modify a vector store; only the fields you pass are changed",
        params_model=ModifyVectorStoreParams,
        operation="modify_vector_store",
    ),
    ToolDefinition(
        name="vector-store-file-add",
        description="Add an existing uploaded file to a vector store",
        params_model=VectorStoreFileParams,
        operation="add_vector_store_file",
    ),
    ToolDefinition(
        name="vector-store-file-list",
        description="List files in a vector store",
        params_model=ListVectorStoreFilesParams,
        operation="list_vector_store_files",
    ),
    ToolDefinition(
        name="vector-store-file-get",
        description="Get details of a specific file in a vector store",
        params_model=VectorStoreFileParams,
        operation="get_vector_store_file",
    ),
    ToolDefinition(
        name="vector-store-file-content",
        description="Get the parsed content of a file in a vector store",
        params_model=VectorStoreFileParams,
        operation="get_vector_store_file_content",
    ),
    ToolDefinition(
        name="vector-store-file-update",
        description="Update metadata of a file in a vector store",
        params_model=UpdateVectorStoreFileParams,
        operation="update_vector_store_file",
    ),
    ToolDefinition(
        name="vector-store-file-delete",
        description=(
            "Remove a file from a vector store. The uploaded file itself is "
            "not deleted."
        ),
        params_model=VectorStoreFileParams,
        operation="delete_vector_store_file",
    ),
    ToolDefinition(
        name="vector-store-file-batch-create",
        description=(
            "Attach several files to a vector store in one batch. Ingestion is "
            "asynchronous; poll vector-store-file-batch-get for progress."
        ),
        params_model=CreateFileBatchParams,
        operation="create_file_batch",
    ),
    ToolDefinition(
        name="vector-store-file-batch-get",
        description=(
            "Get the current status of a file batch (queued, in_progress, "
            "completed, cancelled or failed)"
        ),
        params_model=FileBatchParams,
        operation="get_file_batch",
    ),
    ToolDefinition(
        name="vector-store-file-batch-cancel",
        description="Cancel a file batch that is still being processed",
        params_model=FileBatchParams,
        operation="cancel_file_batch",
    ),
    ToolDefinition(
        name="vector-store-file-batch-files",
        description="List files in a file batch, optionally filtered by file status",
        params_model=ListFileBatchFilesParams,
        operation="list_file_batch_files",
    ),
    ToolDefinition(
        name="file-upload",
        description=(
            "Upload a local file for use with vector stores. Not supported by "
            "this server; upload through the OpenAI API and use the file ID."
        ),
        params_model=UploadFileParams,
        operation="upload_file",
    ),
    ToolDefinition(
        name="file-list",
        description=(
            "List uploaded files in the OpenAI account. Use purpose "
            "'assistants' to find files usable with vector stores."
        ),
        params_model=ListFilesParams,
        operation="list_files",
    ),
    ToolDefinition(
        name="file-get",
        description="Get details about an uploaded file: size, purpose, creation date",
        params_model=FileIdParams,
        operation="get_file",
    ),
    ToolDefinition(
        name="file-delete",
        description=(
            "Permanently delete an uploaded file. This removes it from every "
            "vector store and cannot be undone."
        ),
        params_model=FileIdParams,
        operation="delete_file",
    ),
    ToolDefinition(
        name="file-content",
        description="Retrieve the content of an uploaded file",
        params_model=FileIdParams,
        operation="get_file_content",
    ),
    ToolDefinition(
        name="upload-create",
        description=(
            "Create a multipart upload session for a large file (over 25 MB)"
        ),
        params_model=CreateUploadParams,
        operation="create_upload",
    ),
)

TOOLS_BY_NAME: dict[str, ToolDefinition] = {tool.name: tool for tool in TOOLS}


def get_tool(name: str) -> ToolDefinition:
    """Look up a tool by name.

    Raises:
        ToolNotFoundError: If the name is not in the catalogue.
    """
    try:
        return TOOLS_BY_NAME[name]
    except KeyError:
        raise ToolNotFoundError(name) from None


def list_mcp_tools() -> list[MCPTool]:
    return [tool.to_mcp_tool() for tool in TOOLS]
