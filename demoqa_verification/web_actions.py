"""Facade over Playwright actions with visibility waits and step tracing.

Every interaction waits for its target to be visible, scrolls it into view
and then acts. Every check waits up to a timeout and fails with the selector
and the expected state. Probes (`is_element_present`, `wait_for_url`) return
booleans instead of raising.
"""

from __future__ import annotations

import re
from typing import Any, Union

from playwright.sync_api import Page, expect
from playwright.sync_api import TimeoutError as PlaywrightTimeout

from demoqa_verification import utils
from demoqa_verification.locators import Target, TargetLike
from demoqa_verification.reporting import StepLog, attach_png

TextPattern = Union[str, re.Pattern[str]]

DOM_READY_TIMEOUT = 10000
NETWORK_IDLE_TIMEOUT = 15000


def _describe(pattern: TextPattern) -> str:
    return pattern.pattern if isinstance(pattern, re.Pattern) else pattern


class WebActions:
    def __init__(
        self,
        page: Page,
        default_timeout: float = 30000,
        screenshots_dir: str = "demoqa_verification/screenshots",
    ) -> None:
        self.page = page
        self.default_timeout = default_timeout
        self.screenshots_dir = screenshots_dir
        self.steps = StepLog()

    def step(self, name: str):
        return self.steps.step(name)

    def target(self, target: TargetLike) -> Target:
        return Target.of(self.page, target)

    def _timeout(self, timeout: float | None) -> float:
        return timeout or self.default_timeout

    # Navigation

    def navigate_to_url(self, url: str, wait_until: str = "load") -> None:
        with self.step(f"Navigate to URL: {url}"):
            self.page.goto(url, wait_until=wait_until)
            self.wait_for_page_load()

    def wait_for_page_load(self) -> None:
        """Wait for DOM-ready, then give background requests a chance to settle.

        A network-idle timeout does not fail navigation.
        """
        self.page.wait_for_load_state("domcontentloaded", timeout=DOM_READY_TIMEOUT)
        try:
            self.page.wait_for_load_state("networkidle", timeout=NETWORK_IDLE_TIMEOUT)
        except PlaywrightTimeout:
            print(f"Network still busy after {NETWORK_IDLE_TIMEOUT}ms, DOM is ready - continuing")

    # Interactions

    def click_element(
        self, target: TargetLike, timeout: float | None = None, force: bool = False
    ) -> None:
        element = self.target(target)
        with self.step(f"Click element: {element}"):
            element.click(self._timeout(timeout), force=force)

    def fill_text(
        self,
        target: TargetLike,
        text: str,
        clear: bool = True,
        timeout: float | None = None,
    ) -> None:
        """Fill a field and re-read it; fails if the value did not stick."""
        element = self.target(target)
        with self.step(f'Fill text "{text}" into: {element}'):
            element.fill(text, self._timeout(timeout), clear=clear)
            try:
                expect(element.resolve()).to_have_value(text, timeout=self._timeout(timeout))
            except AssertionError as exc:
                actual = element.resolve().input_value()
                raise AssertionError(
                    f'Field {element} should contain "{text}" after filling, '
                    f'but it contains "{actual}"'
                ) from exc

    def select_option(
        self,
        target: TargetLike,
        value: str | None = None,
        *,
        label: str | None = None,
        index: int | None = None,
        timeout: float | None = None,
    ) -> list[str]:
        element = self.target(target)
        with self.step(f"Select option from: {element}"):
            element.visible(self._timeout(timeout))
            element.scroll_into_view(self._timeout(timeout))
            locator = element.resolve()
            if value is not None:
                return locator.select_option(value=value)
            if index is not None:
                return locator.select_option(index=index)
            if label is not None:
                return locator.select_option(label=label)
            raise ValueError("select_option needs a value, label or index")

    def scroll_to_element(self, target: TargetLike, timeout: float | None = None) -> None:
        self.target(target).scroll_into_view(self._timeout(timeout))

    def handle_alert(self, action: str = "accept", text: str | None = None) -> None:
        """Answer the next dialog the page opens."""

        def answer(dialog) -> None:
            if text is not None and dialog.type == "prompt":
                dialog.accept(text)
            elif action == "accept":
                dialog.accept()
            else:
                dialog.dismiss()

        with self.step(f"Handle alert: {action}"):
            self.page.once("dialog", answer)

    def execute_script(self, script: str, arg: Any = None) -> Any:
        with self.step(f"Execute script: {script[:50]}..."):
            return self.page.evaluate(script, arg)

    def wait(self, milliseconds: float) -> None:
        with self.step(f"Wait {milliseconds}ms"):
            self.page.wait_for_timeout(milliseconds)

    # Waits

    def wait_for_element_visible(self, target: TargetLike, timeout: float | None = None) -> None:
        self.target(target).visible(self._timeout(timeout))

    def wait_for_element_hidden(self, target: TargetLike, timeout: float | None = None) -> None:
        self.target(target).hidden(self._timeout(timeout))

    # Checks

    def verify_element_visible(
        self,
        target: TargetLike,
        timeout: float | None = None,
        error_message: str | None = None,
    ) -> None:
        element = self.target(target)
        timeout = self._timeout(timeout)
        with self.step(f"Verify element visible: {element}"):
            try:
                expect(element.resolve()).to_be_visible(timeout=timeout)
            except AssertionError as exc:
                raise AssertionError(
                    error_message
                    or f"Element not visible: {element} (expected visible within {timeout:.0f}ms)"
                ) from exc

    def verify_element_text(
        self,
        target: TargetLike,
        expected: TextPattern,
        exact: bool = False,
        timeout: float | None = None,
    ) -> None:
        element = self.target(target)
        timeout = self._timeout(timeout)
        with self.step(f'Verify element text "{_describe(expected)}" in: {element}'):
            try:
                if exact:
                    expect(element.resolve()).to_have_text(expected, timeout=timeout)
                else:
                    expect(element.resolve()).to_contain_text(expected, timeout=timeout)
            except AssertionError as exc:
                raise AssertionError(
                    f'Element {element} should {"have" if exact else "contain"} text '
                    f'"{_describe(expected)}" within {timeout:.0f}ms'
                ) from exc

    def verify_url(self, expected: TextPattern, timeout: float | None = None) -> None:
        with self.step(f'Verify page URL matches "{_describe(expected)}" (found: "{self.page.url}")'):
            try:
                expect(self.page).to_have_url(expected, timeout=self._timeout(timeout))
            except AssertionError as exc:
                raise AssertionError(
                    f'Page URL should match "{_describe(expected)}", but it is "{self.page.url}"'
                ) from exc

    def verify_page_title(self, expected: TextPattern, timeout: float | None = None) -> None:
        actual = self.page.title()
        with self.step(f'Verify page title matches "{_describe(expected)}" (found: "{actual}")'):
            try:
                expect(self.page).to_have_title(expected, timeout=self._timeout(timeout))
            except AssertionError as exc:
                raise AssertionError(
                    f'Page title should match "{_describe(expected)}", '
                    f'but it is "{self.page.title()}"'
                ) from exc

    # Reads

    def get_element_text(self, target: TargetLike, timeout: float | None = None) -> str:
        element = self.target(target)
        with self.step(f"Get text from element: {element}"):
            element.visible(self._timeout(timeout))
            return element.resolve().text_content() or ""

    def get_element_attribute(
        self, target: TargetLike, attribute: str, timeout: float | None = None
    ) -> str | None:
        element = self.target(target)
        with self.step(f'Get attribute "{attribute}" from: {element}'):
            element.visible(self._timeout(timeout))
            return element.resolve().get_attribute(attribute)

    # Probes

    def is_element_present(self, target: TargetLike, timeout: float = 5000) -> bool:
        return self.target(target).is_visible(timeout)

    def wait_for_url(self, pattern: TextPattern, timeout: float = 10000) -> bool:
        try:
            self.page.wait_for_url(pattern, timeout=timeout)
        except PlaywrightTimeout:
            return False
        return True

    # Reporting

    def take_screenshot(self, name: str) -> bytes:
        with self.step(f"Take screenshot: {name}"):
            body = utils.capture_screenshot(self.page, name, self.screenshots_dir)
            attach_png(name, body)
            return body

    def log_success(self, message: str) -> None:
        with self.step(f"✅ {message}"):
            pass

    def log_info(self, message: str) -> None:
        with self.step(f"ℹ️ {message}"):
            pass

    def log_warning(self, message: str) -> None:
        with self.step(f"⚠️ {message}"):
            pass
