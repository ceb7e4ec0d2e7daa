"""
Shared fixtures: fake drivers, elements and controllers.

Unit tests never launch a browser. Selenium objects are MagicMocks with
real values where the code reads them (tag_name, location, ...).
"""

from io import StringIO
from typing import Optional
from unittest.mock import MagicMock

import pytest
from rich.console import Console
from selenium.webdriver.remote.webelement import WebElement

from se_shell.driver.options import DriverConfig
from se_shell.driver.session import DriverSession, SessionManager
from se_shell.tui.console import ShellConsole, TUIConfig, create_theme


def make_element(
    tag_name: str = "div",
    text: str = "",
    displayed: bool = True,
    element_id: Optional[str] = None,
    attributes: Optional[dict] = None,
) -> MagicMock:
    """A WebElement stand-in that passes isinstance checks."""
    element = MagicMock(spec=WebElement)
    element.tag_name = tag_name
    element.text = text
    element.id = element_id
    element.location = {"x": 10, "y": 20}
    element.size = {"width": 100, "height": 30}
    element.is_displayed.return_value = displayed
    element.is_enabled.return_value = True
    element.is_selected.return_value = False
    attrs = attributes or {}
    element.get_attribute.side_effect = lambda name: attrs.get(name)
    return element


class FakeController:
    """Stands in for DriverController; the driver is a MagicMock."""

    def __init__(self, config: Optional[DriverConfig] = None):
        self.config = config or DriverConfig()
        self._driver = MagicMock(name=f"{self.config.browser}-driver")
        self._driver.session_id = f"sid-{id(self)}"
        self.initialized = False
        self.closed = False

    @property
    def is_initialized(self) -> bool:
        return self.initialized

    @property
    def driver(self):
        return self._driver

    async def initialize(self) -> None:
        self.initialized = True

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def element_factory():
    return make_element


@pytest.fixture
def controller():
    fake = FakeController()
    fake.initialized = True
    return fake


@pytest.fixture
def session(controller):
    return DriverSession(name="chrome", controller=controller)


@pytest.fixture
def driver(session):
    return session.driver


@pytest.fixture
def manager():
    return SessionManager(controller_factory=FakeController)


@pytest.fixture
def shell_console():
    """A ShellConsole that records output instead of writing to the terminal."""
    config = TUIConfig(show_timestamps=False)
    recorder = Console(file=StringIO(), width=140, color_system=None, theme=create_theme(config))
    return ShellConsole(config, console=recorder)