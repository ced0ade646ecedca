"""A single locator type accepted by every facade operation."""

from __future__ import annotations

from typing import Union

from playwright.sync_api import Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeout

from demoqa_verification.exceptions import InteractionTimeout


class Target:
    """An element to act on, plus a description used in steps and errors.

    Build one with `Target.of`, which accepts a CSS selector, a Playwright
    `Locator` or an existing `Target`.
    """

    def __init__(self, locator: Locator, description: str) -> None:
        self._locator = locator
        self.description = description

    @classmethod
    def of(cls, page: Page, target: TargetLike) -> Target:
        if isinstance(target, Target):
            return target
        if isinstance(target, str):
            return cls(page.locator(target), target)
        return cls(target, str(target))

    def __str__(self) -> str:
        return self.description

    def resolve(self) -> Locator:
        return self._locator

    def visible(self, timeout: float) -> None:
        """Wait for the element to be visible or raise `InteractionTimeout`."""
        try:
            self._locator.wait_for(state="visible", timeout=timeout)
        except PlaywrightTimeout as exc:
            raise InteractionTimeout(self.description, "visible", timeout) from exc

    def hidden(self, timeout: float) -> None:
        try:
            self._locator.wait_for(state="hidden", timeout=timeout)
        except PlaywrightTimeout as exc:
            raise InteractionTimeout(self.description, "hidden", timeout) from exc

    def is_visible(self, timeout: float) -> bool:
        """Probe: True once visible within `timeout`, False otherwise."""
        try:
            self._locator.wait_for(state="visible", timeout=timeout)
        except PlaywrightTimeout:
            return False
        return True

    def scroll_into_view(self, timeout: float) -> None:
        self._locator.scroll_into_view_if_needed(timeout=timeout)

    def click(self, timeout: float, force: bool = False) -> None:
        self.visible(timeout)
        self.scroll_into_view(timeout)
        self._locator.click(timeout=timeout, force=force)

    def fill(self, text: str, timeout: float, clear: bool = True) -> None:
        self.visible(timeout)
        self.scroll_into_view(timeout)
        if clear:
            self._locator.clear(timeout=timeout)
        self._locator.fill(text, timeout=timeout)


TargetLike = Union[str, Locator, Target]
