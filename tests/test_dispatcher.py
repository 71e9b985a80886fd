"""
Unit tests for the Dispatch Module.

Tests cover:
- Command parsing (unknown tools, missing/invalid arguments, aliases)
- Each tool's driver call and result shape
- Error normalization into the result envelope
"""

import asyncio
from pathlib import Path

import pytest

from browserd.errors import InvalidArgumentError, UnknownCommandError
from browserd.modules.dispatch import NO_TEXT_FOUND, parse_command
from browserd.modules.dispatch.commands import (
    ClickElement,
    LaunchBrowser,
    Screenshot,
    TypeText,
)


async def launch(dispatcher, **arguments) -> str:
    response = await dispatcher.execute("launch_browser", arguments)
    assert response.success, response.error
    return response.result["handle"]


# =============================================================================
# Command Parsing Tests
# =============================================================================


class TestParseCommand:
    """Test validation of raw tool invocations."""

    def test_unknown_command(self):
        with pytest.raises(UnknownCommandError) as exc_info:
            parse_command("teleport", {})
        assert "teleport" in str(exc_info.value)

    def test_missing_name(self):
        with pytest.raises(UnknownCommandError):
            parse_command(None, {})

    def test_missing_selector(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_command("click_element", {"handle": "h"})
        assert exc_info.value.missing == ["selector"]
        assert "selector" in str(exc_info.value)

    def test_missing_all_required(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_command("type_text", {})
        assert set(exc_info.value.missing) == {"handle", "selector", "text"}

    def test_wrong_type(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_command("type_text", {"handle": "h", "selector": "#q", "text": ["a"]})
        assert exc_info.value.missing == []
        assert exc_info.value.invalid

    def test_arguments_not_an_object(self):
        with pytest.raises(InvalidArgumentError):
            parse_command("screenshot", ["h"])

    def test_launch_defaults(self):
        command = parse_command("launch_browser", None)
        assert isinstance(command, LaunchBrowser)
        assert command.engine == "chromium"
        assert command.headless is True
        assert command.engine_options is None

    def test_legacy_argument_names(self):
        """browserId/browserType/options are accepted as aliases."""
        command = parse_command("launch_browser", {"browserType": "webkit", "options": {"slowMo": 1}})
        assert command.engine == "webkit"
        assert command.engine_options == {"slowMo": 1}

        command = parse_command("click_element", {"browserId": "h1", "selector": "a"})
        assert isinstance(command, ClickElement)
        assert command.handle == "h1"

    def test_screenshot_full_page(self):
        command = parse_command("screenshot", {"handle": "h", "fullPage": True})
        assert isinstance(command, Screenshot)
        assert command.full_page is True

    def test_empty_text_allowed(self):
        command = parse_command("type_text", {"handle": "h", "selector": "#q", "text": ""})
        assert isinstance(command, TypeText)
        assert command.text == ""


# =============================================================================
# Tool Execution Tests
# =============================================================================


@pytest.mark.asyncio
async def test_launch_browser(dispatcher, session_module):
    response = await dispatcher.execute("launch_browser", {})

    assert response.success is True
    handle = response.result["handle"]
    assert handle in session_module.list_handles()
    assert response.result["engine"] == "chromium"
    assert handle in response.result["message"]


@pytest.mark.asyncio
async def test_launch_browser_failure(dispatcher, fake_driver, session_module):
    fake_driver.launch_error = RuntimeError("Host system is missing dependencies")

    response = await dispatcher.execute("launch_browser", {"engine": "firefox"})

    assert response.success is False
    assert "Failed to launch browser" in response.error
    assert "missing dependencies" in response.error
    assert len(session_module) == 0


@pytest.mark.asyncio
async def test_launch_browser_unknown_engine(dispatcher, fake_driver):
    response = await dispatcher.execute("launch_browser", {"engine": "lynx"})

    assert response.success is False
    assert "lynx" in response.error
    assert fake_driver.launches == []


@pytest.mark.asyncio
async def test_navigate_to(dispatcher, fake_driver, browser_config):
    handle = await launch(dispatcher)
    page = fake_driver.browsers[0].page
    page.url = "https://example.com/"

    response = await dispatcher.execute("navigate_to", {"handle": handle, "url": "https://example.com"})

    assert response.success is True
    assert response.result["url"] == "https://example.com"
    assert response.result["resolvedUrl"] == "https://example.com/"
    page.goto.assert_awaited_once_with(
        "https://example.com",
        wait_until="networkidle",
        timeout=browser_config.navigation_timeout_ms,
    )


@pytest.mark.asyncio
async def test_navigate_to_timeout(dispatcher, fake_driver):
    handle = await launch(dispatcher)
    fake_driver.browsers[0].page.goto.side_effect = TimeoutError("Timeout 30000ms exceeded")

    response = await dispatcher.execute("navigate_to", {"handle": handle, "url": "https://slow.example"})

    assert response.success is False
    assert "https://slow.example" in response.error
    assert "Timeout 30000ms exceeded" in response.error


@pytest.mark.asyncio
async def test_navigate_to_unknown_handle(dispatcher):
    response = await dispatcher.execute("navigate_to", {"handle": "nonexistent", "url": "https://x.com"})

    assert response.success is False
    assert "nonexistent" in response.error
    assert "not found" in response.error


@pytest.mark.asyncio
async def test_click_element(dispatcher, fake_driver):
    handle = await launch(dispatcher)
    page = fake_driver.browsers[0].page

    response = await dispatcher.execute("click_element", {"handle": handle, "selector": "#submit"})

    assert response.success is True
    assert response.result["selector"] == "#submit"
    page.click.assert_awaited_once_with("#submit", timeout=10000)


@pytest.mark.asyncio
async def test_click_element_missing_selector_never_reaches_driver(dispatcher, fake_driver):
    handle = await launch(dispatcher)
    page = fake_driver.browsers[0].page

    response = await dispatcher.execute("click_element", {"handle": handle})

    assert response.success is False
    assert "selector" in response.error
    page.click.assert_not_called()


@pytest.mark.asyncio
async def test_click_element_failure(dispatcher, fake_driver):
    handle = await launch(dispatcher)
    fake_driver.browsers[0].page.click.side_effect = RuntimeError("waiting for locator('#gone')")

    response = await dispatcher.execute("click_element", {"handle": handle, "selector": "#gone"})

    assert response.success is False
    assert "click element #gone" in response.error
    assert handle in response.error


@pytest.mark.asyncio
async def test_type_text(dispatcher, fake_driver):
    handle = await launch(dispatcher)
    page = fake_driver.browsers[0].page

    response = await dispatcher.execute(
        "type_text", {"handle": handle, "selector": "input[name=q]", "text": "playwright"}
    )

    assert response.success is True
    assert response.result["text"] == "playwright"
    page.fill.assert_awaited_once_with("input[name=q]", "playwright", timeout=10000)


@pytest.mark.asyncio
async def test_type_text_failure(dispatcher, fake_driver):
    handle = await launch(dispatcher)
    fake_driver.browsers[0].page.fill.side_effect = RuntimeError("Element is not an <input>")

    response = await dispatcher.execute("type_text", {"handle": handle, "selector": "div", "text": "x"})

    assert response.success is False
    assert "type text into div" in response.error


@pytest.mark.asyncio
async def test_get_text(dispatcher, fake_driver):
    handle = await launch(dispatcher)

    response = await dispatcher.execute("get_text", {"handle": handle, "selector": "h1"})

    assert response.success is True
    assert response.result["text"] == "Example Domain"
    fake_driver.browsers[0].page.text_content.assert_awaited_once_with("h1", timeout=10000)


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [None, ""])
async def test_get_text_empty(dispatcher, fake_driver, content):
    handle = await launch(dispatcher)
    fake_driver.browsers[0].page.text_content.return_value = content

    response = await dispatcher.execute("get_text", {"handle": handle, "selector": "span.empty"})

    assert response.success is True
    assert response.result["text"] == NO_TEXT_FOUND == "No text found"


@pytest.mark.asyncio
async def test_get_text_failure(dispatcher, fake_driver):
    handle = await launch(dispatcher)
    fake_driver.browsers[0].page.text_content.side_effect = TimeoutError("Timeout 10000ms exceeded")

    response = await dispatcher.execute("get_text", {"handle": handle, "selector": "#late"})

    assert response.success is False
    assert "get text from #late" in response.error


@pytest.mark.asyncio
async def test_screenshot(dispatcher, fake_driver, browser_config):
    handle = await launch(dispatcher)
    page = fake_driver.browsers[0].page

    response = await dispatcher.execute("screenshot", {"handle": handle})

    assert response.success is True
    filename = response.result["filename"]
    assert filename.endswith(".png")
    assert Path(filename).parent == Path(browser_config.screenshot_dir)
    assert Path(browser_config.screenshot_dir).is_dir()
    assert response.result["fullPage"] is False
    page.screenshot.assert_awaited_once_with(path=filename, full_page=False, type="png")


@pytest.mark.asyncio
async def test_screenshot_filenames_do_not_collide(dispatcher):
    handle = await launch(dispatcher)

    responses = await asyncio.gather(
        *(dispatcher.execute("screenshot", {"handle": handle, "fullPage": True}) for _ in range(5))
    )

    filenames = {r.result["filename"] for r in responses}
    assert len(filenames) == 5
    assert all(r.result["fullPage"] is True for r in responses)


@pytest.mark.asyncio
async def test_screenshot_failure(dispatcher, fake_driver):
    handle = await launch(dispatcher)
    fake_driver.browsers[0].page.screenshot.side_effect = RuntimeError("Target page has been closed")

    response = await dispatcher.execute("screenshot", {"handle": handle})

    assert response.success is False
    assert "Failed to take screenshot" in response.error


@pytest.mark.asyncio
async def test_close_browser(dispatcher, session_module, fake_driver):
    handle = await launch(dispatcher)

    response = await dispatcher.execute("close_browser", {"handle": handle})

    assert response.success is True
    assert response.result["handle"] == handle
    assert session_module.list_handles() == []

    again = await dispatcher.execute("close_browser", {"handle": handle})
    assert again.success is False
    assert handle in again.error
    fake_driver.browsers[0].close.assert_awaited_once()


@pytest.mark.asyncio
async def test_close_browser_close_failure(dispatcher, session_module, fake_driver):
    handle = await launch(dispatcher)
    fake_driver.browsers[0].close.side_effect = RuntimeError("connection lost")

    response = await dispatcher.execute("close_browser", {"handle": handle})

    assert response.success is False
    assert "connection lost" in response.error
    assert handle not in session_module


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "name,arguments",
    [
        ("navigate_to", {"url": "https://example.com"}),
        ("click_element", {"selector": "a"}),
        ("type_text", {"selector": "a", "text": "b"}),
        ("get_text", {"selector": "a"}),
        ("screenshot", {}),
        ("close_browser", {}),
    ],
)
async def test_session_commands_require_handle(dispatcher, name, arguments):
    response = await dispatcher.execute(name, arguments)

    assert response.success is False
    assert "handle" in response.error


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "name,arguments",
    [
        ("navigate_to", {"url": "https://example.com"}),
        ("click_element", {"selector": "a"}),
        ("type_text", {"selector": "a", "text": "b"}),
        ("get_text", {"selector": "a"}),
        ("screenshot", {}),
        ("close_browser", {}),
    ],
)
async def test_session_commands_bogus_handle(dispatcher, name, arguments):
    response = await dispatcher.execute(name, {"handle": "bogus-handle-123", **arguments})

    assert response.success is False
    assert "bogus-handle-123" in response.error


@pytest.mark.asyncio
async def test_unknown_tool_envelope(dispatcher):
    response = await dispatcher.execute("fly_to_moon", {})

    assert response.success is False
    assert response.to_payload() == {"success": False, "error": "Unknown tool: fly_to_moon"}


@pytest.mark.asyncio
async def test_unexpected_exception_is_contained(dispatcher, session_module, monkeypatch):
    """A bug escaping a handler still produces an envelope."""

    async def broken(*args, **kwargs):
        raise KeyError("boom")

    monkeypatch.setattr(session_module, "create_session", broken)

    response = await dispatcher.execute("launch_browser", {})

    assert response.success is False
    assert "launch_browser" in response.error


@pytest.mark.asyncio
async def test_commands_on_same_handle_are_serialized(dispatcher, fake_driver):
    """Two commands on one session never run their page calls at the same time."""
    handle = await launch(dispatcher)
    page = fake_driver.browsers[0].page
    active = 0
    peak = 0

    async def tracked(*args, **kwargs):
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        await asyncio.sleep(0.01)
        active -= 1

    page.goto.side_effect = tracked
    page.click.side_effect = tracked

    results = await asyncio.gather(
        dispatcher.execute("navigate_to", {"handle": handle, "url": "https://example.com"}),
        dispatcher.execute("click_element", {"handle": handle, "selector": "a"}),
    )

    assert all(r.success for r in results)
    assert peak == 1
