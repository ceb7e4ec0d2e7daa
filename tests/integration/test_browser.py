"""
Integration tests against a real headless Chrome.

Skipped when no Chrome/Chromium binary is installed. Selenium Manager
resolves the matching chromedriver.
"""

import shutil
from urllib.parse import quote

import pytest
import pytest_asyncio

from se_shell.driver import DriverConfig, SessionManager
from se_shell.shell import ShellRunner
from se_shell.tools import find_element, get_title, run_script, screenshot, send_keys, wait_element

CHROME = next(
    (path for path in map(shutil.which, ("google-chrome", "chromium", "chromium-browser", "chrome")) if path),
    None,
)

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(CHROME is None, reason="Chrome is not installed"),
]

FORM_PAGE = """<!DOCTYPE html>
<html>
<head><title>Sign in</title></head>
<body>
  <form onsubmit="document.title = 'Hello ' + this.user.value; return false;">
    <input name="user" id="user">
    <button type="submit" id="go">Go</button>
  </form>
  <p id="late" style="display:none">ready</p>
  <script>setTimeout(() => document.getElementById('late').style.display = 'block', 300);</script>
</body>
</html>"""


def data_url(html: str) -> str:
    return "data:text/html;charset=utf-8," + quote(html)


@pytest_asyncio.fixture
async def manager():
    manager = SessionManager()
    await manager.start(DriverConfig(browser="chrome", state="headless", arguments=["--no-sandbox"]))
    yield manager
    await manager.stop_all()


class TestBrowser:
    @pytest.mark.asyncio
    async def test_fill_form(self, manager):
        session = manager.get()
        runner = ShellRunner(manager=manager)
        assert (await runner.execute(f"navigate --url '{data_url(FORM_PAGE)}'")).success

        found = await find_element(session, value="#user")
        assert found.success
        assert found.data[0]["id"] == "E1"

        typed = await send_keys(session, keys="ada{{Enter}}", element="E1")
        assert typed.success

        title = await get_title(session)
        assert title.data == "Hello ada"

    @pytest.mark.asyncio
    async def test_wait_for_late_element(self, manager):
        session = manager.get()
        await ShellRunner(manager=manager).execute(f"navigate --url '{data_url(FORM_PAGE)}'")

        hidden = await find_element(session, value="#late")
        assert not hidden.success

        waited = await wait_element(session, condition="visible", value="#late", timeout=5)
        assert waited.success

    @pytest.mark.asyncio
    async def test_script_and_screenshot(self, manager, tmp_path):
        session = manager.get()
        await ShellRunner(manager=manager).execute(f"navigate --url '{data_url(FORM_PAGE)}'")

        result = await run_script(session, script="return document.querySelectorAll('input, button');")
        assert [item["id"] for item in result.data] == ["E1", "E2"]

        shot = await screenshot(session, path=str(tmp_path / "page.jpg"))
        assert shot.success
        assert (tmp_path / "page.jpg").read_bytes()[:2] == b"\xff\xd8"
