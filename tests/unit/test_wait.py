"""
Unit tests for wait-element, wait-driver and sleep.
"""

from unittest.mock import patch

import pytest
from selenium.common.exceptions import TimeoutException
from selenium.webdriver.common.by import By

from se_shell.errors import CommandError
from se_shell.tools.wait import (
    MAX_SLEEP_SECONDS,
    driver_condition,
    element_condition,
    sleep,
    wait_driver,
    wait_element,
)


class TestElementCondition:
    """Building expected conditions."""

    def test_stale_needs_element(self):
        with pytest.raises(CommandError):
            element_condition("stale", locator=(By.ID, "x"))

    def test_present_with_locator(self, driver, element_factory):
        element = element_factory()
        driver.find_element.return_value = element
        condition = element_condition("present", locator=(By.ID, "x"))
        assert condition(driver) is element

    def test_text_contains_on_stored_element(self, driver, element_factory):
        element = element_factory(text="Order confirmed")
        assert element_condition("text-contains", element=element, text="confirmed")(driver)
        assert not element_condition("text-contains", element=element, text="failed")(driver)

    def test_value_contains_on_stored_element(self, driver, element_factory):
        element = element_factory(attributes={"value": "alice@example.com"})
        assert element_condition("value-contains", element=element, text="@example")(driver)

    def test_unknown_condition(self):
        with pytest.raises(CommandError):
            element_condition("sparkly", locator=(By.ID, "x"))

    def test_driver_conditions(self, driver):
        driver.title = "Checkout - Shop"
        assert driver_condition("title-contains", value="Checkout")(driver)
        assert not driver_condition("title-is", value="Checkout")(driver)
        with pytest.raises(CommandError):
            driver_condition("moon-phase")


class TestWaitElement:
    @pytest.mark.asyncio
    async def test_needs_exactly_one_target(self, session):
        result = await wait_element(session, condition="visible")
        assert not result.success
        result = await wait_element(session, condition="visible", value="#a", element="E1")
        assert not result.success

    @pytest.mark.asyncio
    async def test_returns_and_stores_element(self, session, driver, element_factory):
        element = element_factory(tag_name="section")
        driver.find_element.return_value = element

        result = await wait_element(session, condition="present", by="id", value="main", timeout=1)

        assert result.success
        assert result.data["element"]["id"] == "E1"
        assert result.data["element"]["tag_name"] == "section"
        driver.find_element.assert_called_with(By.ID, "main")

    @pytest.mark.asyncio
    async def test_stored_element_condition(self, session, driver, element_factory):
        element = element_factory(text="Saved!")
        session.elements.remember(element)
        result = await wait_element(session, condition="text-contains", element="E1", text="Saved")
        assert result.success
        assert result.data == {"condition": "text-contains", "met": True}

    @pytest.mark.asyncio
    async def test_timeout_message(self, session):
        with patch("se_shell.tools.wait.WebDriverWait") as wait_class:
            wait_class.return_value.until.side_effect = TimeoutException()
            result = await wait_element(session, condition="clickable", value="#buy", timeout=2.5)
        assert not result.success
        assert result.error == "Timed out after 2.5s waiting for element to be clickable"


class TestWaitDriver:
    @pytest.mark.asyncio
    async def test_title_condition_reports_page(self, session, driver):
        driver.title = "Dashboard"
        driver.current_url = "https://app.example/dash"
        result = await wait_driver(session, condition="title-is", value="Dashboard", timeout=1)
        assert result.success
        assert result.data["url"] == "https://app.example/dash"

    @pytest.mark.asyncio
    async def test_window_count(self, session, driver):
        driver.window_handles = ["a", "b"]
        result = await wait_driver(session, condition="window-count", count=2, timeout=1)
        assert result.success
        assert "url" not in result.data

    @pytest.mark.asyncio
    async def test_timeout(self, session):
        with patch("se_shell.tools.wait.WebDriverWait") as wait_class:
            wait_class.return_value.until.side_effect = TimeoutException()
            result = await wait_driver(session, condition="url-contains", value="/done", timeout=3)
        assert not result.success
        assert result.error == "Timed out after 3s waiting for url-contains"


class TestSleep:
    @pytest.mark.asyncio
    async def test_sleep(self):
        with patch("se_shell.tools.wait.asyncio.sleep") as fake_sleep:
            result = await sleep(0.5)
        fake_sleep.assert_awaited_once_with(0.5)
        assert result.data == {"slept_seconds": 0.5}

    @pytest.mark.asyncio
    async def test_sleep_is_capped(self):
        with patch("se_shell.tools.wait.asyncio.sleep") as fake_sleep:
            result = await sleep(10_000)
        fake_sleep.assert_awaited_once_with(MAX_SLEEP_SECONDS)
        assert result.data["slept_seconds"] == MAX_SLEEP_SECONDS
