"""
Navigation Tools

Page navigation, history and the pushed-URL stack.
"""

from typing import Optional

from selenium.common.exceptions import TimeoutException

from ..driver.session import DriverSession
from .base import tool, to_thread, ToolResult

# Schemes passed to the driver untouched
KNOWN_SCHEMES = ("http://", "https://", "file://", "about:", "data:", "chrome://", "edge://")


def normalize_url(url: str) -> str:
    """Prefix https:// when the URL has no scheme."""
    url = url.strip()
    if not url.startswith(KNOWN_SCHEMES):
        url = f"https://{url}"
    return url


async def _page_info(session: DriverSession) -> dict[str, str]:
    driver = session.driver
    return {
        "url": await to_thread(lambda: driver.current_url),
        "title": await to_thread(lambda: driver.title),
    }


@tool(
    name="navigate",
    description="Navigate to a URL. Opens the specified web page in the current driver.",
    parameters={
        "type": "object",
        "properties": {
            "url": {
                "type": "string",
                "description": "The URL to navigate to (e.g., 'https://example.com')",
            },
        },
        "required": ["url"],
    },
)
async def navigate(session: DriverSession, url: str) -> ToolResult:
    """
    Navigate to a URL.

    Args:
        session: Driver session
        url: URL to navigate to (https:// is added when missing)

    Returns:
        ToolResult with final URL and title
    """
    target = normalize_url(url)
    try:
        await to_thread(session.driver.get, target)
    except TimeoutException:
        return ToolResult(
            success=False,
            error=f"Navigation to {target} timed out",
            metadata={"url": target},
        )

    return ToolResult(
        success=True,
        data=await _page_info(session),
        metadata={"requested_url": target},
    )


@tool(
    name="go_back",
    description="Navigate back to the previous page in browser history.",
    parameters={"type": "object", "properties": {}},
)
async def go_back(session: DriverSession) -> ToolResult:
    await to_thread(session.driver.back)
    return ToolResult(success=True, data=await _page_info(session))


@tool(
    name="go_forward",
    description="Navigate forward in browser history.",
    parameters={"type": "object", "properties": {}},
)
async def go_forward(session: DriverSession) -> ToolResult:
    await to_thread(session.driver.forward)
    return ToolResult(success=True, data=await _page_info(session))


@tool(
    name="reload",
    description="Reload the current page.",
    parameters={"type": "object", "properties": {}},
)
async def reload_page(session: DriverSession) -> ToolResult:
    await to_thread(session.driver.refresh)
    return ToolResult(success=True, data=await _page_info(session))


@tool(
    name="get_url",
    description="Show the current URL, or the pushed-URL stack.",
    parameters={
        "type": "object",
        "properties": {
            "stack": {"type": "boolean", "description": "Show the URL stack (top first)"},
        },
    },
)
async def get_url(session: DriverSession, stack: bool = False) -> ToolResult:
    if stack:
        return ToolResult(success=True, data=list(reversed(session.url_stack)))
    url = await to_thread(lambda: session.driver.current_url)
    return ToolResult(success=True, data={"url": url})


@tool(
    name="push_url",
    description="Push the current URL on the stack, then optionally navigate elsewhere.",
    parameters={
        "type": "object",
        "properties": {
            "url": {"type": "string", "description": "URL to navigate to after pushing"},
        },
    },
)
async def push_url(session: DriverSession, url: Optional[str] = None) -> ToolResult:
    current = await to_thread(lambda: session.driver.current_url)
    if url:
        result = await navigate(session, url)
        if not result.success:
            return result
    session.url_stack.append(current)
    data = await _page_info(session)
    data["depth"] = len(session.url_stack)
    return ToolResult(success=True, data=data, metadata={"pushed": current})


@tool(
    name="pop_url",
    description="Navigate back to the most recently pushed URL and remove it from the stack.",
    parameters={"type": "object", "properties": {}},
)
async def pop_url(session: DriverSession) -> ToolResult:
    if not session.url_stack:
        return ToolResult(success=False, error="URL stack is empty")
    url = session.url_stack[-1]
    await to_thread(session.driver.get, url)
    session.url_stack.pop()
    data = await _page_info(session)
    data["depth"] = len(session.url_stack)
    return ToolResult(success=True, data=data)


@tool(
    name="get_title",
    description="Show the current page title.",
    parameters={"type": "object", "properties": {}},
)
async def get_title(session: DriverSession) -> ToolResult:
    return ToolResult(success=True, data={"title": await to_thread(lambda: session.driver.title)})


@tool(
    name="get_html",
    description="Show the page source, or the HTML of a stored element.",
    parameters={
        "type": "object",
        "properties": {
            "element": {"type": "string", "description": "Element id (e.g. E1)"},
            "inner": {"type": "boolean", "description": "innerHTML instead of outerHTML"},
        },
    },
)
async def get_html(
    session: DriverSession,
    element: Optional[str] = None,
    inner: bool = False,
) -> ToolResult:
    if element is None:
        if inner:
            return ToolResult(success=False, error="--inner needs --element")
        html = await to_thread(lambda: session.driver.page_source)
    else:
        target = session.elements.resolve(element)
        html = await to_thread(target.get_attribute, "innerHTML" if inner else "outerHTML")
    return ToolResult(success=True, data=html, metadata={"element": element})
