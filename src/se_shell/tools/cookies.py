"""
Cookie Tools

Read, add and delete cookies for the current page's domain.
"""

from typing import Optional

from ..driver.session import DriverSession
from .base import tool, to_thread, ToolResult
from .models import Cookie


@tool(
    name="get_cookie",
    description="List the cookies visible to the current page, or one cookie by name.",
    parameters={
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Cookie name"},
        },
    },
)
async def get_cookie(session: DriverSession, name: Optional[str] = None) -> ToolResult:
    driver = session.driver
    if name is not None:
        raw = await to_thread(driver.get_cookie, name)
        if raw is None:
            return ToolResult(success=False, error=f"No cookie named '{name}'")
        return ToolResult(success=True, data=Cookie.model_validate(raw).model_dump(by_alias=True))

    cookies = await to_thread(driver.get_cookies)
    return ToolResult(
        success=True,
        data=[Cookie.model_validate(raw).model_dump(by_alias=True) for raw in cookies],
    )


@tool(
    name="set_cookie",
    description="Add a cookie for the current page's domain.",
    parameters={
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Cookie name"},
            "value": {"type": "string", "description": "Cookie value"},
            "path": {"type": "string", "description": "Cookie path"},
            "domain": {"type": "string", "description": "Cookie domain"},
            "secure": {"type": "boolean", "description": "HTTPS only"},
            "http_only": {"type": "boolean", "description": "Hidden from JavaScript"},
            "expiry": {"type": "integer", "description": "Expiry as Unix timestamp"},
            "same_site": {
                "type": "string",
                "description": "SameSite policy",
                "enum": ["Strict", "Lax", "None"],
            },
        },
        "required": ["name", "value"],
    },
)
async def set_cookie(
    session: DriverSession,
    name: str,
    value: str,
    path: Optional[str] = None,
    domain: Optional[str] = None,
    secure: bool = False,
    http_only: bool = False,
    expiry: Optional[int] = None,
    same_site: Optional[str] = None,
) -> ToolResult:
    cookie = Cookie(
        name=name,
        value=value,
        path=path,
        domain=domain,
        secure=secure or None,
        http_only=http_only or None,
        expiry=expiry,
        same_site=same_site,
    )
    await to_thread(session.driver.add_cookie, cookie.to_webdriver())
    return ToolResult(success=True, data=cookie.to_webdriver())


@tool(
    name="remove_cookie",
    description="Delete one cookie by name, or all cookies.",
    parameters={
        "type": "object",
        "properties": {
            "name": {"type": "string", "description": "Cookie name"},
            "all": {"type": "boolean", "description": "Delete every cookie"},
        },
    },
)
async def remove_cookie(
    session: DriverSession,
    name: Optional[str] = None,
    all: bool = False,
) -> ToolResult:
    driver = session.driver
    if all:
        await to_thread(driver.delete_all_cookies)
        return ToolResult(success=True, data={"removed": "all"})
    if not name:
        return ToolResult(success=False, error="Give --name or --all")
    await to_thread(driver.delete_cookie, name)
    return ToolResult(success=True, data={"removed": name})
