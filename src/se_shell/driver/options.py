"""
Driver Options

Turns a DriverConfig into the selenium options object for the chosen
browser. This is where capability negotiation is requested; the driver
itself performs it.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional, Union

from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.safari.options import Options as SafariOptions

from ..config import env_flag
from ..errors import DriverOptionError

BrowserName = Literal["chrome", "edge", "firefox", "safari"]
WindowState = Literal["default", "headless", "maximized", "minimized", "fullscreen"]

BROWSERS = ("chrome", "edge", "firefox", "safari")
WINDOW_STATES = ("default", "headless", "maximized", "minimized", "fullscreen")

BROWSER_ALIASES = {
    "chrome": "chrome",
    "chromium": "chrome",
    "googlechrome": "chrome",
    "edge": "edge",
    "msedge": "edge",
    "firefox": "firefox",
    "ff": "firefox",
    "safari": "safari",
}

# Options Safari's driver has no equivalent for
SAFARI_UNSUPPORTED = (
    "private",
    "profile_dir",
    "user_agent",
    "download_dir",
    "arguments",
)

AnyOptions = Union[ChromeOptions, EdgeOptions, FirefoxOptions, SafariOptions]


def normalize_browser(name: str) -> str:
    """Map a browser name or alias onto one of BROWSERS."""
    key = name.strip().lower().replace(" ", "").replace("-", "")
    if key not in BROWSER_ALIASES:
        raise DriverOptionError(
            name, "browser",
            f"Unknown browser '{name}'. Choose one of: {', '.join(BROWSERS)}",
        )
    return BROWSER_ALIASES[key]


def parse_window_pair(value: str) -> tuple[int, int]:
    """
    Parse "1280x720" or "10,20" into a pair of integers.

    Raises:
        ValueError: If the value is not two integers
    """
    for separator in ("x", "X", ","):
        if separator in value:
            first, _, second = value.partition(separator)
            return int(first.strip()), int(second.strip())
    raise ValueError(f"Expected WIDTHxHEIGHT or X,Y, got '{value}'")


@dataclass
class DriverConfig:
    """
    Configuration for one browser driver.

    Reads from environment variables with sensible defaults.
    """

    browser: BrowserName = "chrome"
    state: WindowState = "default"
    start_url: Optional[str] = None
    private: bool = False
    download_dir: Optional[Path] = None
    profile_dir: Optional[Path] = None
    binary_path: Optional[str] = None
    driver_path: Optional[str] = None

    # Selenium Grid / standalone server URL; local driver when None
    remote_url: Optional[str] = None

    user_agent: Optional[str] = None
    window_size: Optional[tuple[int, int]] = None
    window_position: Optional[tuple[int, int]] = None

    # Implicit wait in seconds
    implicit_wait: float = 0

    accept_insecure_certs: bool = False
    arguments: list[str] = field(default_factory=list)

    @property
    def headless(self) -> bool:
        return self.state == "headless"

    @classmethod
    def from_env(cls) -> "DriverConfig":
        """
        Create DriverConfig from environment variables.

        Environment variables:
            SE_BROWSER: chrome, edge, firefox or safari (default: chrome)
            SE_STATE: default, headless, maximized, minimized, fullscreen
            SE_START_URL: URL opened right after launch
            SE_PRIVATE: true/false (default: false)
            SE_DOWNLOAD_DIR, SE_PROFILE_DIR: paths
            SE_BINARY_PATH, SE_DRIVER_PATH: browser and driver executables
            SE_REMOTE_URL: remote WebDriver server
            SE_USER_AGENT: user agent override
            SE_WINDOW_SIZE: WIDTHxHEIGHT
            SE_WINDOW_POSITION: X,Y
            SE_IMPLICIT_WAIT: seconds (default: 0)
            SE_ACCEPT_INSECURE_CERTS: true/false (default: false)
            SE_ARGUMENTS: extra browser arguments, space separated
        """
        state = os.getenv("SE_STATE", "default").lower()
        if state not in WINDOW_STATES:
            state = "default"

        size = os.getenv("SE_WINDOW_SIZE")
        position = os.getenv("SE_WINDOW_POSITION")
        download_dir = os.getenv("SE_DOWNLOAD_DIR")
        profile_dir = os.getenv("SE_PROFILE_DIR")

        return cls(
            browser=normalize_browser(os.getenv("SE_BROWSER", "chrome")),
            state=state,
            start_url=os.getenv("SE_START_URL") or None,
            private=env_flag("SE_PRIVATE"),
            download_dir=Path(download_dir) if download_dir else None,
            profile_dir=Path(profile_dir) if profile_dir else None,
            binary_path=os.getenv("SE_BINARY_PATH") or None,
            driver_path=os.getenv("SE_DRIVER_PATH") or None,
            remote_url=os.getenv("SE_REMOTE_URL") or None,
            user_agent=os.getenv("SE_USER_AGENT") or None,
            window_size=parse_window_pair(size) if size else None,
            window_position=parse_window_pair(position) if position else None,
            implicit_wait=float(os.getenv("SE_IMPLICIT_WAIT", "0")),
            accept_insecure_certs=env_flag("SE_ACCEPT_INSECURE_CERTS"),
            arguments=os.getenv("SE_ARGUMENTS", "").split(),
        )


def validate_config(config: DriverConfig) -> None:
    """
    Reject option combinations the browser cannot honor.

    Raises:
        DriverOptionError: On the first unsupported option
    """
    if config.browser not in BROWSERS:
        raise DriverOptionError(config.browser, "browser", f"Unknown browser '{config.browser}'")

    if config.browser == "safari":
        if config.headless:
            raise DriverOptionError("safari", "state", "safari does not support headless mode")
        for option in SAFARI_UNSUPPORTED:
            if getattr(config, option):
                raise DriverOptionError("safari", option)

    if config.window_size is not None:
        width, height = config.window_size
        if width <= 0 or height <= 0:
            raise DriverOptionError(config.browser, "window_size", "Window size must be positive")

    if config.window_position is not None:
        x, y = config.window_position
        if x < 0 or y < 0:
            raise DriverOptionError(
                config.browser, "window_position", "Window position must not be negative"
            )

    if config.implicit_wait < 0:
        raise DriverOptionError(config.browser, "implicit_wait", "Implicit wait must not be negative")


def _chromium_options(config: DriverConfig, options: Union[ChromeOptions, EdgeOptions]):
    if config.headless:
        options.add_argument("--headless=new")
    if config.private:
        options.add_argument("--inprivate" if config.browser == "edge" else "--incognito")
    if config.profile_dir:
        options.add_argument(f"--user-data-dir={config.profile_dir}")
    if config.user_agent:
        options.add_argument(f"--user-agent={config.user_agent}")
    if config.download_dir:
        options.add_experimental_option(
            "prefs",
            {
                "download.default_directory": str(Path(config.download_dir).absolute()),
                "download.prompt_for_download": False,
            },
        )
    return options


def _firefox_options(config: DriverConfig, options: FirefoxOptions) -> FirefoxOptions:
    if config.headless:
        options.add_argument("-headless")
    if config.private:
        options.add_argument("-private")
    if config.profile_dir:
        options.add_argument("-profile")
        options.add_argument(str(config.profile_dir))
    if config.user_agent:
        options.set_preference("general.useragent.override", config.user_agent)
    if config.download_dir:
        options.set_preference("browser.download.folderList", 2)
        options.set_preference("browser.download.dir", str(Path(config.download_dir).absolute()))
        options.set_preference("browser.download.useDownloadDir", True)
    return options


def build_options(config: DriverConfig) -> AnyOptions:
    """
    Build the selenium options object for config.browser.

    Args:
        config: Driver configuration (validated here)

    Returns:
        ChromeOptions, EdgeOptions, FirefoxOptions or SafariOptions
    """
    validate_config(config)

    if config.browser == "chrome":
        options = _chromium_options(config, ChromeOptions())
    elif config.browser == "edge":
        options = _chromium_options(config, EdgeOptions())
    elif config.browser == "firefox":
        options = _firefox_options(config, FirefoxOptions())
    else:
        options = SafariOptions()

    if config.binary_path and config.browser != "safari":
        options.binary_location = config.binary_path
    if config.accept_insecure_certs:
        options.accept_insecure_certs = True
    for argument in config.arguments:
        options.add_argument(argument)

    return options
