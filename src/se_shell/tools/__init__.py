"""
Shell Commands

Importing this package registers every command:
- Drivers and timeouts
- Navigation and the URL stack
- Element lookup and waits
- Interactions (click, send-keys, selects, scroll)
- Screenshots, cookies, windows/frames/alerts, scripts
"""

from .base import (
    ToolResult,
    tool,
    to_thread,
    validate_variants,
    get_tool,
    get_all_tools,
    get_tool_schemas,
)
from .driver import (
    start_driver,
    stop_driver,
    get_driver,
    switch_driver,
    set_timeouts,
    get_timeouts,
)
from .navigation import (
    navigate,
    go_back,
    go_forward,
    reload_page,
    get_url,
    push_url,
    pop_url,
    get_title,
    get_html,
)
from .elements import (
    find_element,
    get_element,
    get_attribute,
    forget_element,
)
from .wait import (
    wait_element,
    wait_driver,
    sleep,
)
from .interactions import (
    click,
    send_keys,
    get_keys,
    clear_element,
    submit_form,
    get_select,
    set_select,
    clear_select,
    scroll,
)
from .screenshot import screenshot
from .cookies import (
    get_cookie,
    set_cookie,
    remove_cookie,
)
from .windows import (
    get_window,
    switch_window,
    new_window,
    close_window,
    switch_frame,
    get_alert,
    clear_alert,
)
from .script import run_script

__all__ = [
    # Base
    "ToolResult",
    "tool",
    "to_thread",
    "validate_variants",
    "get_tool",
    "get_all_tools",
    "get_tool_schemas",
    # Drivers
    "start_driver",
    "stop_driver",
    "get_driver",
    "switch_driver",
    "set_timeouts",
    "get_timeouts",
    # Navigation
    "navigate",
    "go_back",
    "go_forward",
    "reload_page",
    "get_url",
    "push_url",
    "pop_url",
    "get_title",
    "get_html",
    # Elements
    "find_element",
    "get_element",
    "get_attribute",
    "forget_element",
    # Wait
    "wait_element",
    "wait_driver",
    "sleep",
    # Interactions
    "click",
    "send_keys",
    "get_keys",
    "clear_element",
    "submit_form",
    "get_select",
    "set_select",
    "clear_select",
    "scroll",
    # Screenshot
    "screenshot",
    # Cookies
    "get_cookie",
    "set_cookie",
    "remove_cookie",
    # Windows, frames, alerts
    "get_window",
    "switch_window",
    "new_window",
    "close_window",
    "switch_frame",
    "get_alert",
    "clear_alert",
    # Script
    "run_script",
]
