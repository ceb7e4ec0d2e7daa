"""
Script Tools

Run JavaScript in the page. Element ids among the arguments are passed as
elements; elements in the return value come back as stored ids.
"""

from typing import Any, Optional

from selenium.webdriver.remote.webelement import WebElement

from ..driver.session import DriverSession
from .base import tool, to_thread, ToolResult
from .models import ElementInfo


def _resolve_arguments(session: DriverSession, arguments: Optional[list[str]]) -> list[Any]:
    resolved: list[Any] = []
    for argument in arguments or []:
        if session.elements.contains(argument):
            resolved.append(session.elements.resolve(argument))
        else:
            resolved.append(argument)
    return resolved


def _render(session: DriverSession, value: Any) -> Any:
    """Replace WebElements (also nested in lists/dicts) with ElementInfo dicts."""
    if isinstance(value, WebElement):
        element_id = session.elements.remember(value)
        return ElementInfo.from_element(element_id, value).model_dump()
    if isinstance(value, list):
        return [_render(session, item) for item in value]
    if isinstance(value, dict):
        return {key: _render(session, item) for key, item in value.items()}
    return value


@tool(
    name="run_script",
    description="Execute JavaScript in the current page. Use 'return' to get a value back.",
    parameters={
        "type": "object",
        "properties": {
            "script": {"type": "string", "description": "JavaScript source"},
            "arg": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Argument (arguments[i]); stored element ids are passed as elements",
            },
            "async": {
                "type": "boolean",
                "description": "Run with execute_async_script (call arguments[arguments.length - 1] to finish)",
            },
        },
        "required": ["script"],
    },
)
async def run_script(
    session: DriverSession,
    script: str,
    arg: Optional[list[str]] = None,
    **flags: Any,
) -> ToolResult:
    # "async" is a keyword, so it arrives through **flags
    run_async = bool(flags.get("async"))
    driver = session.driver
    execute = driver.execute_async_script if run_async else driver.execute_script
    arguments = _resolve_arguments(session, arg)

    def _run():
        return _render(session, execute(script, *arguments))

    result = await to_thread(_run)
    return ToolResult(success=True, data=result, metadata={"async": run_async})
