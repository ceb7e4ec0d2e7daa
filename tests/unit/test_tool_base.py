"""
Unit tests for the tool decorator, registry and variant parameters.
"""

import pytest
from selenium.common.exceptions import NoSuchElementException

from se_shell.errors import CommandError
from se_shell.tools import base
from se_shell.tools.base import ToolResult, get_tool, tool, validate_variants


@pytest.fixture
def registry():
    """Restore the global registry after a test registers throwaway tools."""
    saved = dict(base._TOOL_REGISTRY)
    yield base._TOOL_REGISTRY
    base._TOOL_REGISTRY.clear()
    base._TOOL_REGISTRY.update(saved)


class TestToolDecorator:
    """Registration and result wrapping."""

    def test_registers_metadata(self, registry):
        @tool(name="echo_value", description="Echo", scope="none")
        async def echo_value(text: str) -> ToolResult:
            return ToolResult(success=True, data=text)

        info = get_tool("echo_value")
        assert info["description"] == "Echo"
        assert info["scope"] == "none"
        assert info["function"] is echo_value
        assert echo_value.tool_name == "echo_value"

    @pytest.mark.asyncio
    async def test_plain_return_value_is_wrapped(self, registry):
        @tool(name="plain_value", description="Plain", scope="none")
        async def plain_value():
            return 42

        result = await plain_value()
        assert result.success
        assert result.data == 42

    @pytest.mark.asyncio
    async def test_selenium_exception_becomes_failed_result(self, registry, caplog):
        @tool(name="explodes", description="Raises", scope="none")
        async def explodes():
            raise NoSuchElementException("no such element: #missing")

        with caplog.at_level("WARNING", logger="se_shell.tools.base"):
            result = await explodes()

        assert not result.success
        assert result.error == "no such element: #missing"
        assert result.metadata["exception"] == "NoSuchElementException"
        assert "explodes" in caplog.text

    @pytest.mark.asyncio
    async def test_failed_result_is_logged(self, registry, caplog):
        @tool(name="soft_fail", description="Fails", scope="none")
        async def soft_fail():
            return ToolResult(success=False, error="nope")

        with caplog.at_level("WARNING", logger="se_shell.tools.base"):
            result = await soft_fail()
        assert result.error == "nope"
        assert "soft_fail: nope" in caplog.text


def test_tool_result_str():
    assert str(ToolResult(success=True, data=1)) == "Success: 1"
    assert str(ToolResult(success=False, error="bad")) == "Error: bad"


def test_registry_lists_builtin_commands():
    names = {schema["name"] for schema in base.get_tool_schemas()}
    assert {"start_driver", "navigate", "find_element", "wait_element", "screenshot"} <= names


class TestValidateVariants:
    """Parameters that depend on an enum value on the same command."""

    def test_required_parameter_missing(self):
        with pytest.raises(CommandError, match="--condition text-contains requires --text"):
            validate_variants("wait_element", {"condition": "text-contains", "value": "#x"})

    def test_required_parameter_present(self):
        validate_variants("wait_element", {"condition": "text-contains", "value": "#x", "text": "hi"})

    def test_parameter_of_other_value_rejected(self):
        with pytest.raises(CommandError, match="--text is not valid with --condition visible"):
            validate_variants("wait_element", {"condition": "visible", "value": "#x", "text": "hi"})

    def test_two_required_parameters(self):
        with pytest.raises(CommandError, match="requires --attribute"):
            validate_variants("wait_element", {"condition": "attribute-contains", "text": "x"})

    def test_zero_counts_as_given(self):
        validate_variants("wait_driver", {"condition": "window-count", "count": 0})

    def test_frame_target_needs_value(self):
        with pytest.raises(CommandError, match="--target index requires --value"):
            validate_variants("switch_frame", {"target": "index"})

    def test_frame_default_rejects_value(self):
        with pytest.raises(CommandError, match="--value is not valid with --target default"):
            validate_variants("switch_frame", {"target": "default", "value": "x"})

    def test_tool_without_variants(self):
        validate_variants("navigate", {"url": "example.com"})

    def test_unknown_tool_is_ignored(self):
        validate_variants("no_such_tool", {"x": 1})
