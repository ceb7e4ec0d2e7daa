"""
Unit tests for DriverController; selenium's driver classes are patched.
"""

from unittest.mock import MagicMock, patch

import pytest

from se_shell.driver.controller import DriverController, apply_window_state, launch_driver
from se_shell.driver.options import DriverConfig
from se_shell.errors import DriverOptionError


class TestLaunchDriver:
    def test_local_chrome_uses_selenium_manager(self):
        with patch("se_shell.driver.controller.webdriver.Chrome") as chrome, \
                patch("selenium.webdriver.chrome.service.Service") as service:
            launch_driver(DriverConfig(browser="chrome", state="headless"))

        service.assert_called_once_with()
        _, kwargs = chrome.call_args
        assert "--headless=new" in kwargs["options"].arguments
        assert kwargs["service"] is service.return_value

    def test_driver_path(self):
        with patch("se_shell.driver.controller.webdriver.Firefox"), \
                patch("selenium.webdriver.firefox.service.Service") as service:
            launch_driver(DriverConfig(browser="firefox", driver_path="/opt/geckodriver"))
        service.assert_called_once_with(executable_path="/opt/geckodriver")

    def test_remote(self):
        with patch("se_shell.driver.controller.webdriver.Remote") as remote, \
                patch("se_shell.driver.controller.webdriver.Chrome") as chrome:
            launch_driver(DriverConfig(browser="edge", remote_url="http://grid:4444"))
        chrome.assert_not_called()
        assert remote.call_args.kwargs["command_executor"] == "http://grid:4444"

    def test_invalid_config_never_launches(self):
        with patch("se_shell.driver.controller.webdriver.Safari") as safari:
            with pytest.raises(DriverOptionError):
                launch_driver(DriverConfig(browser="safari", private=True))
        safari.assert_not_called()


class TestApplyWindowState:
    def test_size_position_and_state(self):
        driver = MagicMock()
        config = DriverConfig(
            state="maximized",
            window_size=(1280, 720),
            window_position=(0, 10),
            implicit_wait=2,
        )
        apply_window_state(driver, config)
        driver.set_window_size.assert_called_once_with(1280, 720)
        driver.set_window_position.assert_called_once_with(0, 10)
        driver.maximize_window.assert_called_once()
        driver.implicitly_wait.assert_called_once_with(2)

    def test_headless_leaves_window_alone(self):
        driver = MagicMock()
        apply_window_state(driver, DriverConfig(state="headless"))
        driver.maximize_window.assert_not_called()
        driver.minimize_window.assert_not_called()
        driver.fullscreen_window.assert_not_called()
        driver.implicitly_wait.assert_not_called()


class TestDriverController:
    @pytest.mark.asyncio
    async def test_lifecycle(self):
        fake = MagicMock()
        config = DriverConfig(start_url="https://example.com")
        with patch("se_shell.driver.controller.launch_driver", return_value=fake) as launch:
            controller = await DriverController.create(config)
            await controller.initialize()

        launch.assert_called_once_with(config)
        fake.get.assert_called_once_with("https://example.com")
        assert controller.is_initialized
        assert controller.driver is fake

        await controller.close()
        fake.quit.assert_called_once()
        assert not controller.is_initialized
        with pytest.raises(RuntimeError):
            controller.driver

    @pytest.mark.asyncio
    async def test_failed_setup_quits_driver(self):
        fake = MagicMock()
        fake.get.side_effect = RuntimeError("net::ERR_NAME_NOT_RESOLVED")
        controller = DriverController(DriverConfig(start_url="https://nowhere.invalid"))
        with patch("se_shell.driver.controller.launch_driver", return_value=fake):
            with pytest.raises(RuntimeError):
                await controller.initialize()
        fake.quit.assert_called_once()
        assert not controller.is_initialized

    @pytest.mark.asyncio
    async def test_quit_errors_are_logged(self, caplog):
        fake = MagicMock()
        fake.quit.side_effect = RuntimeError("session already gone")
        with patch("se_shell.driver.controller.launch_driver", return_value=fake):
            async with DriverController(DriverConfig()) as controller:
                pass
        assert not controller.is_initialized
        assert "Failed to quit driver cleanly" in caplog.text
