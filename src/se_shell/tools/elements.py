"""
Element Tools

Locate elements with selenium's By strategies and hand them to the user
as short ids (E1, E2, ...) that later commands accept via --element.
"""

import fnmatch
import logging
from typing import Any, Optional

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from ..driver.session import DriverSession
from ..errors import CommandError
from .base import tool, to_thread, ToolResult
from .models import ElementInfo

logger = logging.getLogger(__name__)

LOCATOR_STRATEGIES = {
    "css": By.CSS_SELECTOR,
    "xpath": By.XPATH,
    "id": By.ID,
    "name": By.NAME,
    "class-name": By.CLASS_NAME,
    "tag-name": By.TAG_NAME,
    "link-text": By.LINK_TEXT,
    "partial-link-text": By.PARTIAL_LINK_TEXT,
}

LOCATOR_PROPERTIES = {
    "by": {
        "type": "string",
        "description": "Locator strategy",
        "enum": list(LOCATOR_STRATEGIES),
        "default": "css",
    },
    "value": {"type": "string", "description": "Locator value (selector, xpath, id, ...)"},
}


def to_locator(by: str, value: str) -> tuple[str, str]:
    """Map a shell strategy name and value to a selenium locator tuple."""
    if by not in LOCATOR_STRATEGIES:
        raise CommandError(
            f"Unknown locator strategy '{by}'. Choose one of: {', '.join(LOCATOR_STRATEGIES)}"
        )
    return LOCATOR_STRATEGIES[by], value


def parse_attribute_filters(filters: Optional[list[str]]) -> dict[str, str]:
    """Parse repeated NAME=PATTERN filters."""
    parsed: dict[str, str] = {}
    for item in filters or []:
        name, sep, pattern = item.partition("=")
        if not sep or not name.strip():
            raise CommandError(f"Attribute filter must look like NAME=PATTERN, got '{item}'")
        parsed[name.strip()] = pattern
    return parsed


def _matches_filters(element: Any, filters: dict[str, str]) -> bool:
    for name, pattern in filters.items():
        actual = element.get_attribute(name)
        if actual is None or not fnmatch.fnmatchcase(actual, pattern):
            return False
    return True


async def resolve_target(
    session: DriverSession,
    element: Optional[str] = None,
    by: str = "css",
    value: Optional[str] = None,
) -> Any:
    """
    Resolve --element, or --by/--value, to a single WebElement.

    Elements found by locator are remembered in the session store.
    """
    if element:
        return session.elements.resolve(element)
    if not value:
        raise CommandError("Give --element or --value")
    found = await to_thread(session.driver.find_element, *to_locator(by, value))
    session.elements.remember(found)
    return found


async def element_infos(session: DriverSession, elements: list[Any], attributes=()) -> list[dict]:
    """Remember elements and snapshot them as ElementInfo dicts."""
    infos = []
    for found in elements:
        element_id = session.elements.remember(found)
        info = await to_thread(ElementInfo.from_element, element_id, found, attributes)
        infos.append(info.model_dump())
    return infos


@tool(
    name="find_element",
    description="Find elements on the page (or under a stored element) and store them as E1, E2, ...",
    parameters={
        "type": "object",
        "properties": {
            **LOCATOR_PROPERTIES,
            "element": {"type": "string", "description": "Search under this stored element"},
            "timeout": {
                "type": "number",
                "description": "Seconds to wait for at least one match (default: 0)",
                "default": 0,
            },
            "all": {"type": "boolean", "description": "Include elements that are not displayed"},
            "single": {"type": "boolean", "description": "Fail unless exactly one element matches"},
            "attribute": {
                "type": "array",
                "items": {"type": "string"},
                "description": "NAME=PATTERN attribute filter with shell wildcards (repeatable)",
            },
        },
        "required": ["value"],
    },
)
async def find_element(
    session: DriverSession,
    value: str,
    by: str = "css",
    element: Optional[str] = None,
    timeout: float = 0,
    all: bool = False,
    single: bool = False,
    attribute: Optional[list[str]] = None,
) -> ToolResult:
    """
    Find elements.

    Args:
        session: Driver session
        value: Locator value
        by: Locator strategy
        element: Parent element id
        timeout: Seconds to wait for a match
        all: Include hidden elements
        single: Require exactly one match
        attribute: NAME=PATTERN filters

    Returns:
        ToolResult with a list of ElementInfo dicts
    """
    locator = to_locator(by, value)
    filters = parse_attribute_filters(attribute)
    root = session.elements.resolve(element) if element else session.driver

    if timeout and timeout > 0:
        try:
            matches = await to_thread(
                WebDriverWait(root, timeout).until,
                EC.presence_of_all_elements_located(locator),
            )
        except TimeoutException:
            matches = []
    else:
        matches = await to_thread(root.find_elements, *locator)

    def _filter():
        kept = []
        for candidate in matches:
            if not all and not candidate.is_displayed():
                continue
            if filters and not _matches_filters(candidate, filters):
                continue
            kept.append(candidate)
        return kept

    kept = await to_thread(_filter)

    if not kept:
        return ToolResult(
            success=False,
            error=f"No element found using {by} '{value}'",
            metadata={"by": by, "value": value, "timeout": timeout},
        )
    if single and len(kept) != 1:
        return ToolResult(
            success=False,
            error=f"Expected a single element using {by} '{value}', found {len(kept)}",
            metadata={"count": len(kept)},
        )

    infos = await element_infos(session, kept, attributes=filters.keys())
    return ToolResult(
        success=True,
        data=infos,
        metadata={"by": by, "value": value, "count": len(infos)},
    )


@tool(
    name="get_element",
    description="Show the current state of a stored element.",
    parameters={
        "type": "object",
        "properties": {
            "element": {"type": "string", "description": "Element id (e.g. E1)"},
        },
        "required": ["element"],
    },
)
async def get_element(session: DriverSession, element: str) -> ToolResult:
    target = session.elements.resolve(element)
    info = await to_thread(ElementInfo.from_element, element.strip().upper(), target)
    return ToolResult(success=True, data=info.model_dump())


@tool(
    name="get_attribute",
    description="Read an attribute, DOM property or CSS value of a stored element.",
    parameters={
        "type": "object",
        "properties": {
            "element": {"type": "string", "description": "Element id (e.g. E1)"},
            "name": {"type": "string", "description": "Attribute, property or CSS property name"},
            "kind": {
                "type": "string",
                "description": "What to read",
                "enum": ["attribute", "property", "css"],
                "default": "attribute",
            },
        },
        "required": ["element", "name"],
    },
)
async def get_attribute(
    session: DriverSession,
    element: str,
    name: str,
    kind: str = "attribute",
) -> ToolResult:
    target = session.elements.resolve(element)
    readers = {
        "attribute": target.get_attribute,
        "property": target.get_property,
        "css": target.value_of_css_property,
    }
    value = await to_thread(readers[kind], name)
    return ToolResult(success=True, data={"element": element, "name": name, "value": value})


@tool(
    name="forget_element",
    description="Drop stored element ids.",
    parameters={
        "type": "object",
        "properties": {
            "element": {"type": "string", "description": "Element id to drop"},
            "all": {"type": "boolean", "description": "Drop every stored element"},
        },
    },
)
async def forget_element(
    session: DriverSession,
    element: Optional[str] = None,
    all: bool = False,
) -> ToolResult:
    if all:
        count = len(session.elements)
        session.elements.clear()
        return ToolResult(success=True, data={"forgotten": count})
    if not element:
        return ToolResult(success=False, error="Give --element or --all")
    session.elements.forget(element)
    return ToolResult(success=True, data={"forgotten": 1})
