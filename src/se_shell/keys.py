"""
Special key tokens for send-keys.

Text typed into the browser may contain ``{{Name}}`` tokens, which expand
to the matching member of selenium's ``Keys`` class:

    >>> expand_keys("hello{{Enter}}") == "hello" + Keys.ENTER
    True
"""

import re

from selenium.webdriver.common.keys import Keys

from .errors import KeyTokenError

TOKEN_PATTERN = re.compile(r"\{\{(\w+)\}\}")

KEY_ALIASES = {
    "CTRL": "CONTROL",
    "ESC": "ESCAPE",
    "DEL": "DELETE",
    "BACKSPACE": "BACK_SPACE",
    "PGUP": "PAGE_UP",
    "PGDN": "PAGE_DOWN",
    "CMD": "COMMAND",
}


def _key_table() -> dict[str, str]:
    return {
        name: value
        for name, value in vars(Keys).items()
        if name.isupper() and isinstance(value, str)
    }


def lookup_key(name: str) -> str:
    """Return the key code for a token name (case-insensitive)."""
    table = _key_table()
    upper = name.upper()
    upper = KEY_ALIASES.get(upper, upper)
    if upper not in table:
        raise KeyTokenError(name)
    return table[upper]


def parse_keys(text: str) -> list[str]:
    """
    Split text into literal chunks and key codes.

    Args:
        text: Text with optional {{Key}} tokens

    Returns:
        List of strings suitable for WebElement.send_keys(*parts)
    """
    parts: list[str] = []
    position = 0
    for match in TOKEN_PATTERN.finditer(text):
        if match.start() > position:
            parts.append(text[position:match.start()])
        parts.append(lookup_key(match.group(1)))
        position = match.end()
    if position < len(text):
        parts.append(text[position:])
    return parts


def expand_keys(text: str) -> str:
    """Expand all {{Key}} tokens in text into a single string."""
    return "".join(parse_keys(text))


def available_keys() -> list[str]:
    """Sorted token names accepted inside {{...}}."""
    return sorted(_key_table())
