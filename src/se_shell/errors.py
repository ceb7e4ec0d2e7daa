"""Errors raised by the shell itself.

Selenium's own exceptions are never wrapped; the tool decorator reports
them as failed results. These cover the layer in between: command lines,
driver options and the handles the shell keeps for the user.
"""


class ShellError(Exception):
    """Base class for errors raised by se_shell."""


class CommandError(ShellError):
    """Unknown command, or arguments that do not fit it."""


class DriverOptionError(ShellError):
    """An option the selected browser does not support."""

    def __init__(self, browser: str, option: str, message: str = ""):
        self.browser = browser
        self.option = option
        super().__init__(message or f"{browser} does not support option '{option}'")


class NoSessionError(ShellError):
    """No driver is running, or the named one does not exist."""


class UnknownElementError(ShellError):
    """An element id that is not in the session's element store."""

    def __init__(self, element_id: str):
        self.element_id = element_id
        super().__init__(f"Unknown element '{element_id}'. Run find-element first.")


class KeyTokenError(ShellError):
    """A {{Key}} token that does not name a special key."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Unknown key token '{{{{{token}}}}}'. Run get-keys for the list.")
