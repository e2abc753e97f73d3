"""Tests for handler parameter validation and schema generation."""
import pytest

from tools.base import BaseTool, ToolSchema, ToolParameter, ToolMetadata, ToolRegistry


# ---------------------------------------------------------------------------
# Concrete handler for testing
# ---------------------------------------------------------------------------

class EnrollTool(BaseTool):
    def _build_schema(self) -> ToolSchema:
        return ToolSchema(
            name="enroll",
            description="Ghi danh học sinh",
            metadata=ToolMetadata(destructive_hint=True),
            parameters=[
                ToolParameter(name="student_name", description="tên học sinh", required=True),
                ToolParameter(name="class_name", description="lớp học", required=True),
                ToolParameter(name="subject", description="tiêu đề", default="Ghi danh"),
                ToolParameter(
                    name="status",
                    description="trạng thái",
                    enum=["active", "pending"],
                ),
            ],
        )

    async def execute(self, **kwargs):
        return {"success": True, "message": "ok", "data": kwargs}


# ---------------------------------------------------------------------------
# ToolSchema
# ---------------------------------------------------------------------------

class TestToolSchema:
    def test_to_json_schema_structure(self):
        js = EnrollTool().schema.to_json_schema()
        assert js["name"] == "enroll"
        assert js["description"] == "Ghi danh học sinh"
        assert js["inputSchema"]["type"] == "object"
        assert js["inputSchema"]["additionalProperties"] is False

    def test_json_schema_properties(self):
        props = EnrollTool().schema.to_json_schema()["inputSchema"]["properties"]
        assert props["student_name"] == {"type": "string", "description": "tên học sinh"}
        assert props["subject"]["default"] == "Ghi danh"
        assert props["status"]["enum"] == ["active", "pending"]

    def test_json_schema_required(self):
        js = EnrollTool().schema.to_json_schema()
        assert js["inputSchema"]["required"] == ["student_name", "class_name"]

    def test_metadata_exported(self):
        js = EnrollTool().schema.to_json_schema()
        assert js["metadata"]["destructive_hint"] is True
        assert js["metadata"]["mock_mode"] is False

    def test_schema_cached(self):
        tool = EnrollTool()
        assert tool.schema is tool.schema


# ---------------------------------------------------------------------------
# Parameter validation
# ---------------------------------------------------------------------------

class TestParameterValidation:
    @pytest.mark.asyncio
    async def test_missing_required_param_names_it(self):
        with pytest.raises(ValueError, match="Thiếu thông tin bắt buộc: lớp học."):
            await EnrollTool().validate_parameters(student_name="A")

    @pytest.mark.asyncio
    async def test_lists_every_missing_param(self):
        with pytest.raises(ValueError, match="tên học sinh, lớp học"):
            await EnrollTool().validate_parameters()

    @pytest.mark.asyncio
    async def test_blank_counts_as_missing(self):
        with pytest.raises(ValueError):
            await EnrollTool().validate_parameters(student_name="", class_name="1A")

    @pytest.mark.asyncio
    async def test_all_required_present_succeeds(self):
        assert await EnrollTool().validate_parameters(student_name="A", class_name="1A") is True

    @pytest.mark.asyncio
    async def test_extra_params_allowed(self):
        result = await EnrollTool().validate_parameters(
            student_name="A", class_name="1A", phone="0123"
        )
        assert result is True


# ---------------------------------------------------------------------------
# ToolRegistry
# ---------------------------------------------------------------------------

class TestToolRegistry:
    def test_register_and_get(self):
        registry = ToolRegistry()
        tool = EnrollTool()
        registry.register(tool)
        assert registry.get_tool("enroll") is tool

    def test_get_unknown_returns_none(self):
        assert ToolRegistry().get_tool("nonexistent") is None

    def test_list_tools(self):
        registry = ToolRegistry()
        registry.register(EnrollTool())
        assert registry.list_tools() == ["enroll"]

    def test_get_json_schemas(self):
        registry = ToolRegistry()
        registry.register(EnrollTool())
        json_schemas = registry.get_json_schemas()
        assert len(json_schemas) == 1
        assert json_schemas[0]["name"] == "enroll"

    def test_get_tools_status(self):
        registry = ToolRegistry()
        registry.register(EnrollTool())
        assert registry.get_tools_status() == [{
            "name": "enroll",
            "mock_mode": False,
            "destructive": True,
            "read_only": False,
        }]
