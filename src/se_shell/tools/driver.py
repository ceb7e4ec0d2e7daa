"""
Driver Tools

Start, stop, list and switch browser drivers, and read or change their
timeouts.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional

from ..driver.options import BROWSERS, WINDOW_STATES, DriverConfig, normalize_browser, parse_window_pair
from ..driver.session import DriverSession, SessionManager
from ..errors import DriverOptionError
from .base import tool, to_thread, ToolResult
from .models import SessionInfo

logger = logging.getLogger(__name__)


def _session_info(manager: SessionManager, session: DriverSession) -> dict[str, Any]:
    current = manager.current
    return SessionInfo(
        name=session.name,
        browser=session.browser,
        session_id=session.session_id,
        current=current is not None and current.name == session.name,
        element_count=len(session.elements),
    ).model_dump()


def build_config(base: Optional[DriverConfig] = None, **overrides: Any) -> DriverConfig:
    """
    Merge command-line flags over a base config (env config by default).

    None values in overrides are ignored. Window pairs may be given as
    strings ("1280x720", "10,20").
    """
    config = base or DriverConfig.from_env()
    changes = {key: value for key, value in overrides.items() if value is not None}

    if "browser" in changes:
        changes["browser"] = normalize_browser(changes["browser"])
    for key in ("window_size", "window_position"):
        if isinstance(changes.get(key), str):
            try:
                changes[key] = parse_window_pair(changes[key])
            except ValueError as e:
                raise DriverOptionError(changes.get("browser", config.browser), key, str(e))
    for key in ("download_dir", "profile_dir"):
        if key in changes:
            changes[key] = Path(changes[key])
    # Flags default to False on the command line; only True overrides env
    for key in ("private", "accept_insecure_certs"):
        if changes.get(key) is False:
            del changes[key]
    if "arguments" in changes:
        changes["arguments"] = list(config.arguments) + list(changes["arguments"])

    return replace(config, **changes)


@tool(
    name="start_driver",
    description="Start a browser driver and make it the current one.",
    parameters={
        "type": "object",
        "properties": {
            "browser": {
                "type": "string",
                "description": "Browser to drive",
                "enum": list(BROWSERS),
            },
            "state": {
                "type": "string",
                "description": "Window state after launch",
                "enum": list(WINDOW_STATES),
            },
            "start_url": {"type": "string", "description": "URL to open after launch"},
            "name": {"type": "string", "description": "Session name (default: browser name)"},
            "private": {"type": "boolean", "description": "Private / incognito browsing"},
            "download_dir": {"type": "string", "description": "Default download directory"},
            "profile_dir": {"type": "string", "description": "Browser profile directory"},
            "binary_path": {"type": "string", "description": "Browser executable"},
            "driver_path": {"type": "string", "description": "Driver executable (default: Selenium Manager)"},
            "remote_url": {"type": "string", "description": "Remote WebDriver server URL"},
            "user_agent": {"type": "string", "description": "User agent override"},
            "window_size": {"type": "string", "description": "WIDTHxHEIGHT"},
            "window_position": {"type": "string", "description": "X,Y"},
            "implicit_wait": {"type": "number", "description": "Implicit wait in seconds"},
            "accept_insecure_certs": {"type": "boolean", "description": "Accept self-signed certificates"},
            "argument": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Extra browser argument (repeatable)",
            },
        },
    },
    scope="manager",
)
async def start_driver(
    manager: SessionManager,
    name: Optional[str] = None,
    **options: Any,
) -> ToolResult:
    """
    Start a driver.

    Args:
        manager: Session manager
        name: Session name
        **options: DriverConfig fields (None means "from environment")

    Returns:
        ToolResult with the new session's info
    """
    if "argument" in options:
        options["arguments"] = options.pop("argument")
    config = build_config(**options)
    session = await manager.start(config, name=name)
    data = _session_info(manager, session)
    if config.start_url:
        data["url"] = await to_thread(lambda: session.driver.current_url)
    return ToolResult(success=True, data=data, metadata={"state": config.state})


@tool(
    name="stop_driver",
    description="Quit a driver (the current one by default).",
    parameters={
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Session to stop"},
            "all": {"type": "boolean", "description": "Stop every running driver"},
        },
    },
    scope="manager",
)
async def stop_driver(
    manager: SessionManager,
    name: Optional[str] = None,
    all: bool = False,
) -> ToolResult:
    if all:
        stopped = await manager.stop_all()
    else:
        stopped = [await manager.stop(name)]
    return ToolResult(
        success=True,
        data={
            "stopped": [session.name for session in stopped],
            "current": manager.current.name if manager.current else None,
        },
    )


@tool(
    name="get_driver",
    description="List running drivers.",
    parameters={
        "type": "object",
        "properties": {
            "current": {"type": "boolean", "description": "Only the current driver"},
        },
    },
    scope="manager",
)
async def get_driver(manager: SessionManager, current: bool = False) -> ToolResult:
    if current:
        return ToolResult(success=True, data=_session_info(manager, manager.get()))
    return ToolResult(
        success=True,
        data=[_session_info(manager, session) for session in manager.sessions()],
    )


@tool(
    name="switch_driver",
    description="Make another running driver the current one.",
    parameters={
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Session name"},
        },
        "required": ["name"],
    },
    scope="manager",
)
async def switch_driver(manager: SessionManager, name: str) -> ToolResult:
    session = manager.switch(name)
    return ToolResult(success=True, data=_session_info(manager, session))


@tool(
    name="set_timeouts",
    description="Set the driver's implicit wait, page load and script timeouts (seconds).",
    parameters={
        "type": "object",
        "properties": {
            "implicit": {"type": "number", "description": "Implicit element wait"},
            "page_load": {"type": "number", "description": "Page load timeout"},
            "script": {"type": "number", "description": "Async script timeout"},
        },
    },
)
async def set_timeouts(
    session: DriverSession,
    implicit: Optional[float] = None,
    page_load: Optional[float] = None,
    script: Optional[float] = None,
) -> ToolResult:
    if implicit is None and page_load is None and script is None:
        return ToolResult(success=False, error="Give at least one of --implicit, --page-load, --script")

    driver = session.driver
    if implicit is not None:
        await to_thread(driver.implicitly_wait, implicit)
    if page_load is not None:
        await to_thread(driver.set_page_load_timeout, page_load)
    if script is not None:
        await to_thread(driver.set_script_timeout, script)
    return await get_timeouts(session)


@tool(
    name="get_timeouts",
    description="Show the driver's current timeouts (seconds).",
    parameters={"type": "object", "properties": {}},
)
async def get_timeouts(session: DriverSession) -> ToolResult:
    timeouts = await to_thread(lambda: session.driver.timeouts)
    return ToolResult(
        success=True,
        data={
            "implicit": timeouts.implicit_wait,
            "page_load": timeouts.page_load,
            "script": timeouts.script,
        },
    )
