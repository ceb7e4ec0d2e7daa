"""
Browser Interaction Tools

Mouse and keyboard input on elements:
- click with the plain, JavaScript and ActionChains variants
- send-keys with {{Key}} tokens
- clear and submit
- <select> handling through selenium's Select helper
- scroll
"""

import logging
from typing import Literal, Optional

from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.support.select import Select

from ..driver.session import DriverSession
from ..errors import CommandError
from ..keys import available_keys, parse_keys
from .base import tool, to_thread, ToolResult
from .elements import LOCATOR_PROPERTIES, resolve_target

logger = logging.getLogger(__name__)

CLICK_ACTIONS = (
    "click",
    "js-click",
    "double-click",
    "context-click",
    "click-and-hold",
    "release",
    "move-to",
)

SELECT_MODES = ("text", "value", "index")

TARGET_PROPERTIES = {
    "element": {"type": "string", "description": "Stored element id (e.g. E1)"},
    **LOCATOR_PROPERTIES,
}


def _perform_click(driver, element, action: str) -> None:
    if action == "click":
        element.click()
        return
    if action == "js-click":
        driver.execute_script("arguments[0].click();", element)
        return

    chain = ActionChains(driver)
    gestures = {
        "double-click": chain.double_click,
        "context-click": chain.context_click,
        "click-and-hold": chain.click_and_hold,
        "release": chain.release,
        "move-to": chain.move_to_element,
    }
    if action not in gestures:
        raise CommandError(f"Unknown click action '{action}'")
    gestures[action](element).perform()


@tool(
    name="click",
    description="Click an element, or perform another mouse gesture on it.",
    parameters={
        "type": "object",
        "properties": {
            **TARGET_PROPERTIES,
            "action": {
                "type": "string",
                "description": "Mouse gesture",
                "enum": list(CLICK_ACTIONS),
                "default": "click",
            },
        },
    },
)
async def click(
    session: DriverSession,
    element: Optional[str] = None,
    by: str = "css",
    value: Optional[str] = None,
    action: str = "click",
) -> ToolResult:
    """
    Click an element.

    Args:
        session: Driver session
        element: Stored element id
        by: Locator strategy (when no element id)
        value: Locator value (when no element id)
        action: One of CLICK_ACTIONS

    Returns:
        ToolResult indicating success or failure
    """
    target = await resolve_target(session, element, by, value)
    await to_thread(_perform_click, session.driver, target, action)
    return ToolResult(
        success=True,
        data={"action": action, "element": session.elements.remember(target)},
    )


@tool(
    name="send_keys",
    description="Type text into an element (or the focused element). {{Enter}}-style tokens send special keys.",
    parameters={
        "type": "object",
        "properties": {
            "keys": {"type": "string", "description": "Text to type, e.g. 'hello{{Enter}}'"},
            **TARGET_PROPERTIES,
            "clear": {"type": "boolean", "description": "Clear the field first"},
            "submit": {"type": "boolean", "description": "Submit the enclosing form afterwards"},
        },
        "required": ["keys"],
    },
)
async def send_keys(
    session: DriverSession,
    keys: str,
    element: Optional[str] = None,
    by: str = "css",
    value: Optional[str] = None,
    clear: bool = False,
    submit: bool = False,
) -> ToolResult:
    """
    Send keys to an element.

    Args:
        session: Driver session
        keys: Text with optional {{Key}} tokens
        element: Stored element id
        by: Locator strategy
        value: Locator value
        clear: Clear the field before typing
        submit: Submit the form after typing

    Returns:
        ToolResult with the target element id
    """
    parts = parse_keys(keys)

    if element or value:
        target = await resolve_target(session, element, by, value)
    else:
        target = await to_thread(lambda: session.driver.switch_to.active_element)

    if clear:
        await to_thread(target.clear)
    await to_thread(target.send_keys, *parts)
    if submit:
        await to_thread(target.submit)

    return ToolResult(
        success=True,
        data={
            "element": session.elements.remember(target),
            "typed": keys,
        },
    )


@tool(
    name="get_keys",
    description="List the {{Key}} tokens send-keys understands.",
    parameters={"type": "object", "properties": {}},
    scope="none",
)
async def get_keys() -> ToolResult:
    return ToolResult(success=True, data=[{"token": "{{%s}}" % name} for name in available_keys()])


@tool(
    name="clear_element",
    description="Clear the content of an input or textarea.",
    parameters={"type": "object", "properties": dict(TARGET_PROPERTIES)},
)
async def clear_element(
    session: DriverSession,
    element: Optional[str] = None,
    by: str = "css",
    value: Optional[str] = None,
) -> ToolResult:
    target = await resolve_target(session, element, by, value)
    await to_thread(target.clear)
    return ToolResult(success=True, data={"element": session.elements.remember(target)})


@tool(
    name="submit_form",
    description="Submit the form an element belongs to.",
    parameters={"type": "object", "properties": dict(TARGET_PROPERTIES)},
)
async def submit_form(
    session: DriverSession,
    element: Optional[str] = None,
    by: str = "css",
    value: Optional[str] = None,
) -> ToolResult:
    target = await resolve_target(session, element, by, value)
    await to_thread(target.submit)
    return ToolResult(success=True, data={"element": session.elements.remember(target)})


@tool(
    name="get_select",
    description="Show the selected option(s) of a <select> element.",
    parameters={
        "type": "object",
        "properties": {
            **TARGET_PROPERTIES,
            "all_options": {"type": "boolean", "description": "List every option, not just selected ones"},
        },
    },
)
async def get_select(
    session: DriverSession,
    element: Optional[str] = None,
    by: str = "css",
    value: Optional[str] = None,
    all_options: bool = False,
) -> ToolResult:
    target = await resolve_target(session, element, by, value)

    def _read():
        select = Select(target)
        options = select.options if all_options else select.all_selected_options
        return {
            "multiple": bool(select.is_multiple),
            "options": [
                {
                    "text": option.text,
                    "value": option.get_attribute("value"),
                    "selected": option.is_selected(),
                }
                for option in options
            ],
        }

    return ToolResult(success=True, data=await to_thread(_read))


def _select_call(select: Select, mode: str, value: str, deselect: bool = False):
    prefix = "deselect_by_" if deselect else "select_by_"
    if mode == "text":
        return getattr(select, f"{prefix}visible_text"), value
    if mode == "value":
        return getattr(select, f"{prefix}value"), value
    if mode == "index":
        try:
            return getattr(select, f"{prefix}index"), int(value)
        except ValueError:
            raise CommandError(f"--by-option index needs an integer, got '{value}'")
    raise CommandError(f"Unknown select mode '{mode}'")


@tool(
    name="set_select",
    description="Select an option of a <select> element by visible text, value or index.",
    parameters={
        "type": "object",
        "properties": {
            **TARGET_PROPERTIES,
            "by_option": {
                "type": "string",
                "description": "How to match the option",
                "enum": list(SELECT_MODES),
                "default": "text",
            },
            "option": {"type": "string", "description": "Option text, value or index"},
        },
        "required": ["option"],
    },
)
async def set_select(
    session: DriverSession,
    option: str,
    element: Optional[str] = None,
    by: str = "css",
    value: Optional[str] = None,
    by_option: Literal["text", "value", "index"] = "text",
) -> ToolResult:
    target = await resolve_target(session, element, by, value)
    select = await to_thread(Select, target)
    call, argument = _select_call(select, by_option, option)
    await to_thread(call, argument)
    return ToolResult(
        success=True,
        data={
            "action": "selected",
            "element": session.elements.remember(target),
            "option": option,
        },
    )


@tool(
    name="clear_select",
    description="Deselect all options of a multi-select, or just one option.",
    parameters={
        "type": "object",
        "properties": {
            **TARGET_PROPERTIES,
            "by_option": {
                "type": "string",
                "description": "How to match the option",
                "enum": list(SELECT_MODES),
                "default": "text",
            },
            "option": {"type": "string", "description": "Only deselect this option"},
        },
    },
)
async def clear_select(
    session: DriverSession,
    element: Optional[str] = None,
    by: str = "css",
    value: Optional[str] = None,
    by_option: Literal["text", "value", "index"] = "text",
    option: Optional[str] = None,
) -> ToolResult:
    target = await resolve_target(session, element, by, value)
    select = await to_thread(Select, target)
    if option is None:
        await to_thread(select.deselect_all)
    else:
        call, argument = _select_call(select, by_option, option, deselect=True)
        await to_thread(call, argument)
    return ToolResult(
        success=True,
        data={"action": "deselected", "element": session.elements.remember(target), "option": option},
    )


@tool(
    name="scroll",
    description="Scroll the page by direction, to the top or bottom, or to an element.",
    parameters={
        "type": "object",
        "properties": {
            "direction": {
                "type": "string",
                "enum": ["up", "down", "left", "right"],
                "description": "Direction to scroll",
            },
            "amount": {"type": "integer", "description": "Pixels to scroll (default: 500)", "default": 500},
            "element": {"type": "string", "description": "Stored element id to scroll into view"},
            "to_top": {"type": "boolean", "description": "Scroll to top of page"},
            "to_bottom": {"type": "boolean", "description": "Scroll to bottom of page"},
        },
    },
)
async def scroll(
    session: DriverSession,
    direction: Optional[Literal["up", "down", "left", "right"]] = None,
    amount: int = 500,
    element: Optional[str] = None,
    to_top: bool = False,
    to_bottom: bool = False,
) -> ToolResult:
    """
    Scroll the page.

    Args:
        session: Driver session
        direction: Scroll direction
        amount: Pixels to scroll
        element: Element to scroll into view
        to_top: Scroll to page top
        to_bottom: Scroll to page bottom

    Returns:
        ToolResult with scroll positions before and after
    """
    driver = session.driver
    position_script = "return {x: window.scrollX, y: window.scrollY};"
    initial = await to_thread(driver.execute_script, position_script)

    if to_top:
        await to_thread(driver.execute_script, "window.scrollTo(0, 0);")
        action = "scrolled to top"
    elif to_bottom:
        await to_thread(driver.execute_script, "window.scrollTo(0, document.body.scrollHeight);")
        action = "scrolled to bottom"
    elif element:
        target = session.elements.resolve(element)
        await to_thread(driver.execute_script, "arguments[0].scrollIntoView({block: 'center'});", target)
        action = f"scrolled to element {element}"
    else:
        direction = direction or "down"
        dx, dy = {
            "up": (0, -amount),
            "down": (0, amount),
            "left": (-amount, 0),
            "right": (amount, 0),
        }[direction]
        await to_thread(driver.execute_script, "window.scrollBy(arguments[0], arguments[1]);", dx, dy)
        action = f"scrolled {direction} by {amount}px"

    final = await to_thread(driver.execute_script, position_script)
    return ToolResult(
        success=True,
        data={"action": action, "scroll_from": initial, "scroll_to": final},
    )
