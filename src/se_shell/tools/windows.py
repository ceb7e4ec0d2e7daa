"""
Window, Frame and Alert Tools

Switch between top-level windows and tabs, move into and out of frames,
and read or answer JavaScript alerts.
"""

import logging
from typing import Literal, Optional

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from ..driver.session import DriverSession
from ..errors import CommandError
from .base import tool, to_thread, ToolResult
from .models import WindowInfo
from .navigation import normalize_url

logger = logging.getLogger(__name__)

FRAME_TARGETS: dict[str, list[str]] = {
    "index": ["value"],
    "name": ["value"],
    "element": ["value"],
    "parent": [],
    "default": [],
}


async def _windows(session: DriverSession) -> list[dict]:
    driver = session.driver
    handles = await to_thread(lambda: driver.window_handles)
    current = await to_thread(lambda: driver.current_window_handle)
    return [
        WindowInfo(handle=handle, index=index, current=handle == current).model_dump()
        for index, handle in enumerate(handles)
    ]


@tool(
    name="get_window",
    description="List open windows and tabs of the current driver.",
    parameters={"type": "object", "properties": {}},
)
async def get_window(session: DriverSession) -> ToolResult:
    return ToolResult(success=True, data=await _windows(session))


@tool(
    name="switch_window",
    description="Switch to a window or tab by handle or by index.",
    parameters={
        "type": "object",
        "properties": {
            "handle": {"type": "string", "description": "Window handle"},
            "index": {"type": "integer", "description": "Position in get-window's list"},
        },
    },
)
async def switch_window(
    session: DriverSession,
    handle: Optional[str] = None,
    index: Optional[int] = None,
) -> ToolResult:
    if (handle is None) == (index is None):
        return ToolResult(success=False, error="Give exactly one of --handle or --index")

    driver = session.driver
    if index is not None:
        handles = await to_thread(lambda: driver.window_handles)
        if not 0 <= index < len(handles):
            return ToolResult(
                success=False,
                error=f"Window index {index} out of range (0-{len(handles) - 1})",
            )
        handle = handles[index]

    await to_thread(driver.switch_to.window, handle)
    return ToolResult(success=True, data=await _windows(session))


@tool(
    name="new_window",
    description="Open a new tab or window, switch to it and optionally navigate.",
    parameters={
        "type": "object",
        "properties": {
            "type": {
                "type": "string",
                "enum": ["tab", "window"],
                "default": "tab",
                "description": "Open a tab or a separate window",
            },
            "url": {"type": "string", "description": "URL to open in it"},
        },
    },
)
async def new_window(
    session: DriverSession,
    type: Literal["tab", "window"] = "tab",
    url: Optional[str] = None,
) -> ToolResult:
    driver = session.driver
    await to_thread(driver.switch_to.new_window, type)
    if url:
        await to_thread(driver.get, normalize_url(url))
    handle = await to_thread(lambda: driver.current_window_handle)
    return ToolResult(success=True, data={"handle": handle, "type": type})


@tool(
    name="close_window",
    description="Close a window (the current one by default) and switch to the last remaining one.",
    parameters={
        "type": "object",
        "properties": {
            "handle": {"type": "string", "description": "Window handle to close"},
        },
    },
)
async def close_window(session: DriverSession, handle: Optional[str] = None) -> ToolResult:
    driver = session.driver
    if handle is not None:
        await to_thread(driver.switch_to.window, handle)
    closed = await to_thread(lambda: driver.current_window_handle)
    await to_thread(driver.close)

    remaining = await to_thread(lambda: driver.window_handles)
    if remaining:
        await to_thread(driver.switch_to.window, remaining[-1])
    return ToolResult(
        success=True,
        data={"closed": closed, "remaining": len(remaining)},
    )


@tool(
    name="switch_frame",
    description="Switch into a frame (by index, name or stored element), to the parent frame, or back to the page.",
    parameters={
        "type": "object",
        "properties": {
            "target": {
                "type": "string",
                "enum": list(FRAME_TARGETS),
                "description": "How to pick the frame",
            },
            "value": {"type": "string", "description": "Frame index, name/id, or element id"},
        },
        "required": ["target"],
    },
    variants={"target": FRAME_TARGETS},
)
async def switch_frame(
    session: DriverSession,
    target: str,
    value: Optional[str] = None,
) -> ToolResult:
    """
    Switch frame context.

    Args:
        session: Driver session
        target: index, name, element, parent or default
        value: Frame index, name or element id

    Returns:
        ToolResult describing the new frame context
    """
    switch_to = session.driver.switch_to
    if target == "default":
        await to_thread(switch_to.default_content)
    elif target == "parent":
        await to_thread(switch_to.parent_frame)
    elif target == "index":
        try:
            frame_index = int(value)
        except (TypeError, ValueError):
            raise CommandError(f"--target index needs an integer, got '{value}'")
        await to_thread(switch_to.frame, frame_index)
    elif target == "name":
        await to_thread(switch_to.frame, value)
    elif target == "element":
        await to_thread(switch_to.frame, session.elements.resolve(value))
    else:
        raise CommandError(f"Unknown frame target '{target}'")

    return ToolResult(success=True, data={"target": target, "value": value})


@tool(
    name="get_alert",
    description="Show the text of the open alert, confirm or prompt.",
    parameters={
        "type": "object",
        "properties": {
            "timeout": {"type": "number", "description": "Seconds to wait for an alert (default: 0)", "default": 0},
        },
    },
)
async def get_alert(session: DriverSession, timeout: float = 0) -> ToolResult:
    driver = session.driver
    if timeout and timeout > 0:
        try:
            alert = await to_thread(WebDriverWait(driver, timeout).until, EC.alert_is_present())
        except TimeoutException:
            return ToolResult(success=False, error=f"No alert appeared within {timeout:g}s")
    else:
        alert = await to_thread(lambda: driver.switch_to.alert)
    text = await to_thread(lambda: alert.text)
    return ToolResult(success=True, data={"text": text})


@tool(
    name="clear_alert",
    description="Accept or dismiss the open alert, optionally typing into a prompt first.",
    parameters={
        "type": "object",
        "properties": {
            "action": {
                "type": "string",
                "enum": ["accept", "dismiss"],
                "default": "accept",
                "description": "Button to press",
            },
            "text": {"type": "string", "description": "Text for a prompt() dialog"},
        },
    },
)
async def clear_alert(
    session: DriverSession,
    action: Literal["accept", "dismiss"] = "accept",
    text: Optional[str] = None,
) -> ToolResult:
    alert = await to_thread(lambda: session.driver.switch_to.alert)
    message = await to_thread(lambda: alert.text)
    if text is not None:
        await to_thread(alert.send_keys, text)
    await to_thread(alert.accept if action == "accept" else alert.dismiss)
    return ToolResult(success=True, data={"action": action, "text": message})
