"""
Unit tests for {{Key}} token expansion.
"""

import pytest
from selenium.webdriver.common.keys import Keys

from se_shell.errors import KeyTokenError
from se_shell.keys import available_keys, expand_keys, lookup_key, parse_keys


class TestLookupKey:
    """Token names map onto selenium Keys."""

    def test_exact_name(self):
        assert lookup_key("ENTER") == Keys.ENTER

    def test_case_insensitive(self):
        assert lookup_key("enter") == Keys.ENTER
        assert lookup_key("Tab") == Keys.TAB

    @pytest.mark.parametrize(
        "alias, key",
        [
            ("Ctrl", Keys.CONTROL),
            ("Esc", Keys.ESCAPE),
            ("Del", Keys.DELETE),
            ("Return", Keys.RETURN),
            ("Backspace", Keys.BACK_SPACE),
        ],
    )
    def test_aliases(self, alias, key):
        assert lookup_key(alias) == key

    def test_unknown_token(self):
        with pytest.raises(KeyTokenError):
            lookup_key("Hyper")


class TestParseKeys:
    """Splitting text into literal chunks and key codes."""

    def test_plain_text_passes_through(self):
        assert parse_keys("hello world") == ["hello world"]

    def test_empty_text(self):
        assert parse_keys("") == []

    def test_trailing_token(self):
        assert parse_keys("hello{{Enter}}") == ["hello", Keys.ENTER]

    def test_tokens_between_text(self):
        parts = parse_keys("{{Ctrl}}a{{Delete}}typed")
        assert parts == [Keys.CONTROL, "a", Keys.DELETE, "typed"]

    def test_single_braces_are_literal(self):
        assert parse_keys("{Enter}") == ["{Enter}"]

    def test_unknown_token_raises(self):
        with pytest.raises(KeyTokenError):
            parse_keys("x{{NoSuchKey}}")

    def test_expand_keys_joins(self):
        assert expand_keys("a{{Tab}}b") == "a" + Keys.TAB + "b"


def test_available_keys_sorted_and_complete():
    names = available_keys()
    assert names == sorted(names)
    assert "ENTER" in names
    assert "ARROW_DOWN" in names
