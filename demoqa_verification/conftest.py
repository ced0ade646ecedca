import re
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from playwright.sync_api import Page, expect

from demoqa_verification.books import (
    BOOKS_PAGE_SELECTORS,
    BooksAssertions,
    BookScenarios,
    BooksPage,
    load_test_scenarios,
)
from demoqa_verification.books.assertions import is_relevant
from demoqa_verification.books.data import KNOWN_BOOKS
from demoqa_verification.config import Settings, get_settings
from demoqa_verification.exceptions import ConfigurationError, PaginationError
from demoqa_verification.web_actions import WebActions


def pytest_configure(config):
    """
    Resolves the environment profile before any test runs.
    An unknown ENVIRONMENT aborts the session with the list of valid names.
    """
    try:
        get_settings().profile
    except ConfigurationError as exc:
        raise pytest.UsageError(str(exc)) from exc


@pytest.fixture(scope="session")
def settings() -> Settings:
    return get_settings()


@pytest.fixture(scope="session")
def test_scenarios():
    """The validated scenario document shared by every test in the session."""
    return load_test_scenarios()


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args, settings):
    """
    Configures the browser context arguments for the session.
    Sets the base URL of the selected environment and a desktop viewport.

    Args:
        browser_context_args: Default arguments from pytest-playwright.

    Returns:
        Updated dictionary of context arguments.
    """
    return {
        **browser_context_args,
        "base_url": settings.base_url,
        "viewport": {"width": 1280, "height": 720},
        "locale": "en-US",
        "timezone_id": "America/New_York",
        "extra_http_headers": {"Accept-Language": "en-US,en;q=0.9"},
    }


@pytest.fixture(scope="session")
def browser_type_launch_args(browser_type_launch_args, settings):
    """
    Configures the browser launch arguments.
    HEADLESS, when set, overrides the plugin's --headed flag.

    Args:
        browser_type_launch_args: Default launch arguments.

    Returns:
        Updated dictionary of launch arguments.
    """
    args = {
        **browser_type_launch_args,
        "args": [
            "--disable-web-security",
            "--disable-features=VizDisplayCompositor",
            "--no-sandbox",
            "--disable-setuid-sandbox",
        ],
    }
    if settings.headless is not None:
        args["headless"] = settings.headless
    return args


@pytest.fixture
def web_actions(page: Page, settings) -> WebActions:
    """
    Wraps the test's page in the action facade.
    Applies the configured default timeouts and echoes browser console output.

    Args:
        page: The Playwright Page object.
    """
    page.set_default_timeout(settings.action_timeout)
    page.set_default_navigation_timeout(settings.navigation_timeout)
    expect.set_options(timeout=settings.action_timeout)

    page.on("console", lambda msg: print(f"PAGE LOG: {msg.text}"))
    page.on("pageerror", lambda err: print(f"PAGE ERROR: {err}"))

    return WebActions(
        page,
        default_timeout=settings.profile.timeout,
        screenshots_dir=settings.screenshots_dir,
    )


@pytest.fixture
def books_page(web_actions, settings) -> BooksPage:
    return BooksPage(web_actions, settings.base_url)


@pytest.fixture
def books_assertions(books_page) -> BooksAssertions:
    return BooksAssertions(books_page)


@pytest.fixture
def book_scenarios(books_page, books_assertions, test_scenarios) -> BookScenarios:
    return BookScenarios(books_page, books_assertions, test_scenarios)


LOCAL_BASE_URL = "https://demoqa.local"
STORE_HTML = Path(__file__).parent / "fixtures" / "books_store.html"


@pytest.fixture
def local_books_page(page: Page, web_actions) -> BooksPage:
    """
    A Books page object pointed at a local replica of the store.
    Every request under LOCAL_BASE_URL is answered with the replica, so
    page-object behaviour can be checked without reaching DemoQA.
    """
    html = STORE_HTML.read_text(encoding="utf-8")
    page.route(
        re.compile(r"^https://demoqa\.local/"),
        lambda route: route.fulfill(status=200, content_type="text/html", body=html),
    )
    return BooksPage(web_actions, LOCAL_BASE_URL)


@pytest.fixture
def local_book_scenarios(local_books_page, test_scenarios) -> BookScenarios:
    return BookScenarios(local_books_page, BooksAssertions(local_books_page), test_scenarios)


class RecordingWebActions(WebActions):
    """Facade with no browser behind it; visibility/URL checks are recorded."""

    def __init__(self):
        super().__init__(page=MagicMock())
        self.verified = []

    def verify_element_visible(self, target, timeout=None, error_message=None):
        with self.step(f"Verify element visible: {target}"):
            self.verified.append(target)

    def verify_url(self, expected, timeout=None):
        with self.step(f"Verify URL: {expected}"):
            self.verified.append(expected)

    def verify_page_title(self, expected, timeout=None):
        with self.step(f"Verify page title: {expected}"):
            self.verified.append(expected)


class FakeBooksPage:
    """In-memory Books page: a catalog split into pages, filtered by search."""

    selectors = BOOKS_PAGE_SELECTORS

    def __init__(
        self,
        catalog=KNOWN_BOOKS,
        page_size=10,
        pages=None,
        logged_in=False,
        url_after_click=None,
        present_selectors=(),
    ):
        self.web_actions = RecordingWebActions()
        self.catalog = list(catalog)
        self.page_size = page_size
        self.pages = pages if pages is not None else self._paginate(self.catalog)
        self.index = 0
        self.logged_in = logged_in
        self.url = "https://demoqa.com/books"
        self.url_after_click = url_after_click
        self.present_selectors = set(present_selectors)
        self.calls = []
        self.login_checks = []
        self.no_books_messages = []

    def _paginate(self, books):
        chunks = [books[i:i + self.page_size] for i in range(0, len(books), self.page_size)]
        return chunks or [[]]

    def get_visible_books(self):
        return list(self.pages[self.index])

    def get_total_books_count(self):
        return len(self.pages[self.index])

    def visible_titles(self):
        return [book.title for book in self.get_visible_books()]

    def search(self, term):
        self.calls.append(("search", term))
        self.pages = self._paginate([book for book in self.catalog if is_relevant(book, term)])
        self.index = 0

    def clear_search(self):
        self.calls.append("clear_search")
        self.pages = self._paginate(self.catalog)
        self.index = 0

    def go_to_next_page(self):
        if self.index + 1 >= len(self.pages):
            raise PaginationError("Next button is disabled - already on last page")
        self.calls.append("next")
        self.index += 1

    def go_to_previous_page(self):
        if self.index == 0:
            raise PaginationError("Previous button is disabled - already on first page")
        self.calls.append("previous")
        self.index -= 1

    def verify_no_books_message(self, message="No rows found"):
        self.calls.append("verify_no_books_message")
        self.no_books_messages.append(message)
        assert not self.get_visible_books(), "Element not visible: .rt-noData"

    def verify_book_visible(self, title):
        self.calls.append(("verify_book_visible", title))
        assert title in self.visible_titles(), f'Book "{title}" is not visible'

    def verify_search_box_present(self):
        self.calls.append("verify_search_box_present")

    def verify_table_structure_present(self):
        self.calls.append("verify_table_structure_present")

    def is_user_logged_in(self, user_name_selector=None):
        self.login_checks.append(user_name_selector or self.selectors.user_name_value)
        return self.logged_in

    def click_book_by_title(self, title):
        self.calls.append(("click", title))
        if self.url_after_click:
            self.url = self.url_after_click

    def wait_for_url_change(self, pattern, timeout=10000):
        return bool(pattern.search(self.url))

    def current_url(self):
        return self.url

    def is_element_present(self, selector, timeout=5000):
        return selector in self.present_selectors

    def log_test_success(self, message):
        self.web_actions.log_success(message)


@pytest.fixture
def fake_books_page():
    """Factory for in-memory Books pages; keyword arguments go to FakeBooksPage."""
    return FakeBooksPage
