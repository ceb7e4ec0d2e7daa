"""
Wait Tools

Wait for element and page conditions with selenium's WebDriverWait and
expected conditions. Which extra flags a wait accepts depends on the
--condition picked on the same command.
"""

import asyncio
from typing import Any, Callable, Optional

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from ..driver.session import DriverSession
from ..errors import CommandError
from .base import tool, to_thread, ToolResult
from .elements import LOCATOR_PROPERTIES, element_infos, to_locator

DEFAULT_TIMEOUT = 10.0
MAX_SLEEP_SECONDS = 300

# condition -> extra parameters it requires
ELEMENT_CONDITIONS: dict[str, list[str]] = {
    "present": [],
    "visible": [],
    "invisible": [],
    "clickable": [],
    "selected": [],
    "stale": [],
    "text-contains": ["text"],
    "value-contains": ["text"],
    "attribute-contains": ["attribute", "text"],
}

DRIVER_CONDITIONS: dict[str, list[str]] = {
    "title-is": ["value"],
    "title-contains": ["value"],
    "url-is": ["value"],
    "url-contains": ["value"],
    "url-matches": ["value"],
    "alert-present": [],
    "window-count": ["count"],
}


def element_condition(
    condition: str,
    locator: Optional[tuple[str, str]] = None,
    element: Optional[WebElement] = None,
    text: Optional[str] = None,
    attribute: Optional[str] = None,
) -> Callable:
    """
    Build the expected condition for wait-element.

    Exactly one of locator or element is set. Conditions that only exist in
    one form fall back to the other (the stored element's own state).
    """
    if condition == "stale":
        if element is None:
            raise CommandError("--condition stale needs --element")
        return EC.staleness_of(element)

    if condition == "present":
        if element is not None:
            return lambda driver: element
        return EC.presence_of_element_located(locator)

    if condition == "visible":
        return EC.visibility_of(element) if element is not None else EC.visibility_of_element_located(locator)

    if condition == "invisible":
        if element is not None:
            return EC.invisibility_of_element(element)
        return EC.invisibility_of_element_located(locator)

    if condition == "clickable":
        return EC.element_to_be_clickable(element if element is not None else locator)

    if condition == "selected":
        return EC.element_to_be_selected(element) if element is not None else EC.element_located_to_be_selected(locator)

    # Text conditions check the element through a locator; a stored element
    # is read directly
    if condition == "text-contains":
        if element is not None:
            return lambda driver: text in element.text
        return EC.text_to_be_present_in_element(locator, text)

    if condition == "value-contains":
        if element is not None:
            return lambda driver: text in (element.get_attribute("value") or "")
        return EC.text_to_be_present_in_element_value(locator, text)

    if condition == "attribute-contains":
        if element is not None:
            return lambda driver: text in (element.get_attribute(attribute) or "")
        return EC.text_to_be_present_in_element_attribute(locator, attribute, text)

    raise CommandError(f"Unknown element condition '{condition}'")


def driver_condition(
    condition: str,
    value: Optional[str] = None,
    count: Optional[int] = None,
) -> Callable:
    """Build the expected condition for wait-driver."""
    builders: dict[str, Callable[[], Callable]] = {
        "title-is": lambda: EC.title_is(value),
        "title-contains": lambda: EC.title_contains(value),
        "url-is": lambda: EC.url_to_be(value),
        "url-contains": lambda: EC.url_contains(value),
        "url-matches": lambda: EC.url_matches(value),
        "alert-present": lambda: EC.alert_is_present(),
        "window-count": lambda: EC.number_of_windows_to_be(count),
    }
    if condition not in builders:
        raise CommandError(f"Unknown driver condition '{condition}'")
    return builders[condition]()


async def _wait(session: DriverSession, timeout: float, condition: Callable) -> Any:
    wait = WebDriverWait(session.driver, timeout)
    return await to_thread(wait.until, condition)


@tool(
    name="wait_element",
    description="Wait until an element meets a condition.",
    parameters={
        "type": "object",
        "properties": {
            "condition": {
                "type": "string",
                "description": "Condition to wait for",
                "enum": list(ELEMENT_CONDITIONS),
            },
            **LOCATOR_PROPERTIES,
            "element": {"type": "string", "description": "Stored element id instead of a locator"},
            "text": {"type": "string", "description": "Text the element/value/attribute must contain"},
            "attribute": {"type": "string", "description": "Attribute name for attribute-contains"},
            "timeout": {
                "type": "number",
                "description": f"Seconds to wait (default: {DEFAULT_TIMEOUT:g})",
                "default": DEFAULT_TIMEOUT,
            },
        },
        "required": ["condition"],
    },
    variants={"condition": ELEMENT_CONDITIONS},
)
async def wait_element(
    session: DriverSession,
    condition: str,
    by: str = "css",
    value: Optional[str] = None,
    element: Optional[str] = None,
    text: Optional[str] = None,
    attribute: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> ToolResult:
    """
    Wait for an element condition.

    Args:
        session: Driver session
        condition: One of ELEMENT_CONDITIONS
        by: Locator strategy
        value: Locator value
        element: Stored element id (instead of a locator)
        text: Expected text for the *-contains conditions
        attribute: Attribute for attribute-contains
        timeout: Seconds to wait

    Returns:
        ToolResult with the element when the condition yields one
    """
    if (element is None) == (value is None):
        return ToolResult(success=False, error="Give either --element or --value")

    target = session.elements.resolve(element) if element else None
    locator = to_locator(by, value) if value else None
    expected = element_condition(condition, locator=locator, element=target, text=text, attribute=attribute)

    try:
        outcome = await _wait(session, timeout, expected)
    except TimeoutException:
        return ToolResult(
            success=False,
            error=f"Timed out after {timeout:g}s waiting for element to be {condition}",
            metadata={"condition": condition, "timeout": timeout},
        )

    data: dict[str, Any] = {"condition": condition, "met": True}
    if isinstance(outcome, WebElement):
        data["element"] = (await element_infos(session, [outcome]))[0]
    return ToolResult(success=True, data=data)


@tool(
    name="wait_driver",
    description="Wait until the page title, URL, alert or window count meets a condition.",
    parameters={
        "type": "object",
        "properties": {
            "condition": {
                "type": "string",
                "description": "Condition to wait for",
                "enum": list(DRIVER_CONDITIONS),
            },
            "value": {"type": "string", "description": "Title or URL (pattern) to wait for"},
            "count": {"type": "integer", "description": "Window count for window-count"},
            "timeout": {
                "type": "number",
                "description": f"Seconds to wait (default: {DEFAULT_TIMEOUT:g})",
                "default": DEFAULT_TIMEOUT,
            },
        },
        "required": ["condition"],
    },
    variants={"condition": DRIVER_CONDITIONS},
)
async def wait_driver(
    session: DriverSession,
    condition: str,
    value: Optional[str] = None,
    count: Optional[int] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> ToolResult:
    expected = driver_condition(condition, value=value, count=count)
    try:
        await _wait(session, timeout, expected)
    except TimeoutException:
        return ToolResult(
            success=False,
            error=f"Timed out after {timeout:g}s waiting for {condition}",
            metadata={"condition": condition, "value": value, "timeout": timeout},
        )

    data: dict[str, Any] = {"condition": condition, "met": True}
    # Reading the page while an alert is open raises UnexpectedAlertPresent
    if condition.startswith(("title", "url")):
        driver = session.driver
        data["url"] = await to_thread(lambda: driver.current_url)
        data["title"] = await to_thread(lambda: driver.title)
    return ToolResult(success=True, data=data)


@tool(
    name="sleep",
    description="Pause for a number of seconds. Prefer wait-element / wait-driver when possible.",
    parameters={
        "type": "object",
        "properties": {
            "seconds": {
                "type": "number",
                "description": "Duration to sleep in seconds",
                "minimum": 0,
                "maximum": MAX_SLEEP_SECONDS,
            },
        },
        "required": ["seconds"],
    },
    scope="none",
)
async def sleep(seconds: float) -> ToolResult:
    seconds = max(0.0, min(seconds, MAX_SLEEP_SECONDS))
    await asyncio.sleep(seconds)
    return ToolResult(success=True, data={"slept_seconds": seconds})
