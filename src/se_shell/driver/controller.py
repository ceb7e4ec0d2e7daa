"""
Driver Controller

Owns one selenium WebDriver instance: launches it from a DriverConfig,
applies the post-launch window state and quits it on close.
"""

import asyncio
import logging
from typing import Optional

from selenium import webdriver
from selenium.webdriver.remote.webdriver import WebDriver

from .options import DriverConfig, build_options

logger = logging.getLogger(__name__)


def _driver_classes(browser: str):
    """Return (driver class, service class) for a local browser."""
    if browser == "chrome":
        from selenium.webdriver.chrome.service import Service
        return webdriver.Chrome, Service
    if browser == "edge":
        from selenium.webdriver.edge.service import Service
        return webdriver.Edge, Service
    if browser == "firefox":
        from selenium.webdriver.firefox.service import Service
        return webdriver.Firefox, Service
    if browser == "safari":
        from selenium.webdriver.safari.service import Service
        return webdriver.Safari, Service
    raise ValueError(f"Unsupported browser: {browser}")


def launch_driver(config: DriverConfig) -> WebDriver:
    """
    Start a WebDriver session for config (blocking).

    Uses webdriver.Remote when config.remote_url is set, otherwise the local
    driver class. Without driver_path, Selenium Manager locates the driver.
    """
    options = build_options(config)

    if config.remote_url:
        logger.info("Connecting to remote WebDriver at %s", config.remote_url)
        return webdriver.Remote(command_executor=config.remote_url, options=options)

    driver_class, service_class = _driver_classes(config.browser)
    service = service_class(executable_path=config.driver_path) if config.driver_path else service_class()
    logger.info("Launching %s (%s)", config.browser, config.state)
    return driver_class(options=options, service=service)


def apply_window_state(driver: WebDriver, config: DriverConfig) -> None:
    """Apply size, position, window state and implicit wait after launch."""
    if config.window_size:
        driver.set_window_size(*config.window_size)
    if config.window_position:
        driver.set_window_position(*config.window_position)

    if config.state == "maximized":
        driver.maximize_window()
    elif config.state == "minimized":
        driver.minimize_window()
    elif config.state == "fullscreen":
        driver.fullscreen_window()

    if config.implicit_wait:
        driver.implicitly_wait(config.implicit_wait)


class DriverController:
    """
    Controls one browser driver.

    Usage:
        >>> async with DriverController(DriverConfig(state="headless")) as controller:
        ...     controller.driver.get("https://example.com")
    """

    def __init__(self, config: Optional[DriverConfig] = None):
        """
        Initialize driver controller.

        Args:
            config: Driver configuration (uses env if None)
        """
        self.config = config or DriverConfig.from_env()
        self._driver: Optional[WebDriver] = None

    @property
    def is_initialized(self) -> bool:
        """Check if the driver is running."""
        return self._driver is not None

    @property
    def driver(self) -> WebDriver:
        if self._driver is None:
            raise RuntimeError("Driver not initialized")
        return self._driver

    async def initialize(self) -> None:
        """Launch the driver and open the start URL, if any."""
        if self._driver is not None:
            return

        driver = await asyncio.to_thread(launch_driver, self.config)
        try:
            await asyncio.to_thread(apply_window_state, driver, self.config)
            if self.config.start_url:
                await asyncio.to_thread(driver.get, self.config.start_url)
        except Exception:
            await asyncio.to_thread(driver.quit)
            raise

        self._driver = driver

    async def close(self) -> None:
        """Quit the driver and release the browser."""
        if self._driver is None:
            return
        try:
            await asyncio.to_thread(self._driver.quit)
        except Exception as e:
            logger.warning("Failed to quit driver cleanly: %s", e)
        self._driver = None

    async def __aenter__(self) -> "DriverController":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @classmethod
    async def create(cls, config: Optional[DriverConfig] = None) -> "DriverController":
        """
        Factory method to create and initialize a driver controller.

        Args:
            config: Driver configuration (uses env if None)

        Returns:
            Initialized DriverController instance
        """
        controller = cls(config)
        await controller.initialize()
        return controller
