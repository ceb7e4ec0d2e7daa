"""
Session Manager

Tracks the drivers started from the shell. Each one is a named
DriverSession that also keeps the element handles handed out to the
user (E1, E2, ...) and a stack of pushed URLs.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from ..errors import NoSessionError, UnknownElementError
from .controller import DriverController
from .options import DriverConfig

logger = logging.getLogger(__name__)


class ElementStore:
    """Maps short ids to WebElement handles."""

    PREFIX = "E"

    def __init__(self):
        self._elements: dict[str, WebElement] = {}
        self._counter = 0

    def remember(self, element: WebElement) -> str:
        """Store an element and return its id (existing id if already stored)."""
        for element_id, known in self._elements.items():
            if known is element or _same_element(known, element):
                return element_id
        self._counter += 1
        element_id = f"{self.PREFIX}{self._counter}"
        self._elements[element_id] = element
        return element_id

    def resolve(self, element_id: str) -> WebElement:
        key = element_id.strip().upper()
        if key not in self._elements:
            raise UnknownElementError(element_id)
        return self._elements[key]

    def contains(self, element_id: str) -> bool:
        return element_id.strip().upper() in self._elements

    def forget(self, element_id: str) -> None:
        key = element_id.strip().upper()
        if key not in self._elements:
            raise UnknownElementError(element_id)
        del self._elements[key]

    def clear(self) -> None:
        self._elements.clear()

    def ids(self) -> list[str]:
        return list(self._elements)

    def __len__(self) -> int:
        return len(self._elements)


def _same_element(first: Any, second: Any) -> bool:
    # WebElement equality compares the remote ids
    first_id = getattr(first, "id", None)
    return isinstance(first_id, str) and first_id == getattr(second, "id", None)


@dataclass
class DriverSession:
    """A running driver plus the state the shell keeps for it."""

    name: str
    controller: DriverController
    elements: ElementStore = field(default_factory=ElementStore)
    url_stack: list[str] = field(default_factory=list)

    @property
    def browser(self) -> str:
        return self.controller.config.browser

    @property
    def driver(self) -> WebDriver:
        return self.controller.driver

    @property
    def session_id(self) -> Optional[str]:
        if not self.controller.is_initialized:
            return None
        return getattr(self.controller.driver, "session_id", None)


ControllerFactory = Callable[[DriverConfig], DriverController]


class SessionManager:
    """
    Manages named driver sessions and the current selection.

    Usage:
        >>> manager = SessionManager()
        >>> session = await manager.start(DriverConfig(state="headless"))
        >>> session.driver.get("https://example.com")
        >>> await manager.stop_all()
    """

    def __init__(self, controller_factory: Optional[ControllerFactory] = None):
        """
        Initialize session manager.

        Args:
            controller_factory: Builds a controller from a config
                (DriverController by default)
        """
        self._factory = controller_factory or DriverController
        self._sessions: dict[str, DriverSession] = {}
        self._current: Optional[str] = None

    @property
    def current(self) -> Optional[DriverSession]:
        if self._current is None:
            return None
        return self._sessions.get(self._current)

    def _unique_name(self, base: str) -> str:
        if base not in self._sessions:
            return base
        suffix = 2
        while f"{base}-{suffix}" in self._sessions:
            suffix += 1
        return f"{base}-{suffix}"

    async def start(self, config: DriverConfig, name: Optional[str] = None) -> DriverSession:
        """
        Launch a driver and make it the current session.

        Args:
            config: Driver configuration
            name: Session name (defaults to the browser name)

        Returns:
            The new DriverSession
        """
        session_name = self._unique_name(name or config.browser)
        controller = self._factory(config)
        await controller.initialize()

        session = DriverSession(name=session_name, controller=controller)
        self._sessions[session_name] = session
        self._current = session_name
        logger.info("Started driver '%s' (%s)", session_name, config.browser)
        return session

    def get(self, name: Optional[str] = None) -> DriverSession:
        """
        Get a session by name, or the current one.

        Raises:
            NoSessionError: If there is no such session
        """
        if name is None:
            session = self.current
            if session is None:
                raise NoSessionError("No driver is running. Start one with start-driver.")
            return session
        if name not in self._sessions:
            available = ", ".join(self._sessions) or "none"
            raise NoSessionError(f"No driver named '{name}'. Running: {available}")
        return self._sessions[name]

    def switch(self, name: str) -> DriverSession:
        session = self.get(name)
        self._current = session.name
        return session

    def sessions(self) -> list[DriverSession]:
        return list(self._sessions.values())

    async def stop(self, name: Optional[str] = None) -> DriverSession:
        """
        Quit a driver (the current one by default).

        When the current driver stops, the most recently started remaining
        driver becomes current.
        """
        session = self.get(name)
        await session.controller.close()
        del self._sessions[session.name]
        session.elements.clear()

        if self._current == session.name:
            remaining = list(self._sessions)
            self._current = remaining[-1] if remaining else None
        logger.info("Stopped driver '%s'", session.name)
        return session

    async def stop_all(self) -> list[DriverSession]:
        stopped = []
        for name in list(self._sessions):
            stopped.append(await self.stop(name))
        return stopped

    def __len__(self) -> int:
        return len(self._sessions)
