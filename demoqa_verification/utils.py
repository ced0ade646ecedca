import os

from playwright.sync_api import Page


def capture_screenshot(page: Page, name: str, directory: str = "demoqa_verification/screenshots") -> bytes:
    """
    Captures a full-page screenshot of the current page state.
    Saves it to `directory`, appending '_mobile' or '_desktop' based on viewport width.

    Args:
        page: The Playwright Page object.
        name: The filename (without extension) for the screenshot.
        directory: Where to write the PNG file.

    Returns:
        The PNG bytes, so callers can attach them to a report.
    """
    os.makedirs(directory, exist_ok=True)

    viewport = page.viewport_size
    width = viewport['width'] if viewport else 1280
    suffix = "mobile" if width < 600 else "desktop"
    return page.screenshot(path=f"{directory}/{name}_{suffix}.png", full_page=True, timeout=10000)
