"""
Base Tool Infrastructure

Provides the foundation for shell commands:
- Tool decorator for registration
- ToolResult for standardized responses
- Tool registry for discovery (the shell builds its parser from it)
- Variant parameters that depend on an enum chosen on the same command
"""

import asyncio
import logging
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, Literal, Optional

from selenium.common.exceptions import WebDriverException

from ..errors import CommandError

logger = logging.getLogger(__name__)

# What the shell passes as the first argument of a tool
ToolScope = Literal["session", "manager", "none"]


@dataclass
class ToolResult:
    """
    Standardized result from tool execution.

    Attributes:
        success: Whether the tool executed successfully
        data: Result data (varies by tool)
        error: Error message if failed
        metadata: Additional context (timing, selectors, etc.)
    """

    success: bool
    data: Any = None
    error: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        if self.success:
            return f"Success: {self.data}"
        return f"Error: {self.error}"


# Tool registry for all registered tools
_TOOL_REGISTRY: dict[str, dict[str, Any]] = {}


async def to_thread(func: Callable, *args, **kwargs) -> Any:
    """Run a blocking selenium call off the event loop."""
    return await asyncio.to_thread(func, *args, **kwargs)


def _variant_parameters(variants: dict[str, dict[str, list[str]]], selector: str) -> set[str]:
    params: set[str] = set()
    for required in variants[selector].values():
        params.update(required)
    return params


def validate_variants(name: str, arguments: dict[str, Any]) -> None:
    """
    Check variant parameters for a tool call.

    For each selector parameter (an enum) the chosen value lists the
    parameters it requires; parameters that only other values accept are
    rejected.

    Args:
        name: Registered tool name
        arguments: Keyword arguments for the call (None means not given)

    Raises:
        CommandError: On a missing or misplaced variant parameter
    """
    info = _TOOL_REGISTRY.get(name)
    if not info or not info["variants"]:
        return

    variants = info["variants"]
    for selector, table in variants.items():
        chosen = arguments.get(selector)
        if chosen is None:
            chosen = info["parameters"].get("properties", {}).get(selector, {}).get("default")
        if chosen is None:
            continue

        allowed = set(table.get(chosen, []))
        for param in sorted(allowed):
            if arguments.get(param) is None:
                raise CommandError(
                    f"{name}: --{_flag(selector)} {chosen} requires --{_flag(param)}"
                )
        for param in sorted(_variant_parameters(variants, selector) - allowed):
            value = arguments.get(param)
            if value is not None and value is not False:
                raise CommandError(
                    f"{name}: --{_flag(param)} is not valid with --{_flag(selector)} {chosen}"
                )


def _flag(param: str) -> str:
    return param.replace("_", "-")


def tool(
    name: str,
    description: str,
    parameters: Optional[dict[str, Any]] = None,
    scope: ToolScope = "session",
    variants: Optional[dict[str, dict[str, list[str]]]] = None,
):
    """
    Decorator to register a function as a shell tool.

    Args:
        name: Tool identifier (e.g., "navigate"); the command is the same
            name with dashes
        description: Human-readable description of what the tool does
        parameters: JSON Schema for tool parameters
        scope: First argument the shell passes: a DriverSession ("session"),
            the SessionManager ("manager") or nothing ("none")
        variants: Parameters required by particular enum values

    Example:
        >>> @tool(
        ...     name="navigate",
        ...     description="Navigate to a URL",
        ...     parameters={
        ...         "type": "object",
        ...         "properties": {
        ...             "url": {"type": "string", "description": "URL to navigate to"}
        ...         },
        ...         "required": ["url"]
        ...     }
        ... )
        ... async def navigate(session, url: str) -> ToolResult:
        ...     await to_thread(session.driver.get, url)
        ...     return ToolResult(success=True, data={"url": url})

    Any exception raised by the tool, selenium's included, becomes a failed
    ToolResult and is logged as a warning.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                result = await func(*args, **kwargs)
                if isinstance(result, ToolResult):
                    if not result.success:
                        logger.warning("%s: %s", name, result.error)
                    return result
                return ToolResult(success=True, data=result)
            except Exception as e:
                message = _describe_exception(e)
                logger.warning("%s: %s", name, message)
                return ToolResult(
                    success=False,
                    error=message,
                    metadata={"exception": type(e).__name__},
                )

        wrapper.tool_name = name
        wrapper.tool_description = description
        wrapper.tool_parameters = parameters
        wrapper.tool_scope = scope

        _TOOL_REGISTRY[name] = {
            "name": name,
            "description": description,
            "parameters": parameters or {},
            "function": wrapper,
            "scope": scope,
            "variants": variants or {},
        }

        return wrapper

    return decorator


def _describe_exception(error: Exception) -> str:
    # str() on a WebDriverException appends the remote stacktrace
    if isinstance(error, WebDriverException):
        return (error.msg or type(error).__name__).strip()
    return str(error) or type(error).__name__


def get_tool(name: str) -> Optional[dict[str, Any]]:
    """Get a tool by name from the registry."""
    return _TOOL_REGISTRY.get(name)


def get_all_tools() -> dict[str, dict[str, Any]]:
    """Get all registered tools."""
    return _TOOL_REGISTRY.copy()


def get_tool_schemas() -> list[dict[str, Any]]:
    """
    Get tool schemas (name, description, parameters) for every tool.
    """
    return [
        {
            "name": info["name"],
            "description": info["description"],
            "input_schema": info["parameters"],
        }
        for info in _TOOL_REGISTRY.values()
    ]
