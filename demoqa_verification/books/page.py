"""Page object for the DemoQA Books page."""

from __future__ import annotations

import re

from playwright.sync_api import Locator
from playwright.sync_api import TimeoutError as PlaywrightTimeout

from demoqa_verification.books.data import Book
from demoqa_verification.books.selectors import BOOKS_PAGE_SELECTORS, BooksPageSelectors
from demoqa_verification.exceptions import PaginationError
from demoqa_verification.locators import Target
from demoqa_verification.web_actions import TextPattern, WebActions

RESULTS_TIMEOUT = 5000
SPINNER_TIMEOUT = 5000
SEARCH_SETTLE_DELAY = 1000
LOGIN_CHECK_TIMEOUT = 2000
PAGINATION_TIMEOUT = 5000
NO_ROWS_TEXT = "No rows found"


class BooksPage:
    """Selectors and composite operations for the Books listing."""

    path = "/books"

    def __init__(
        self,
        web_actions: WebActions,
        base_url: str,
        selectors: BooksPageSelectors = BOOKS_PAGE_SELECTORS,
    ) -> None:
        self.web_actions = web_actions
        self.page = web_actions.page
        self.base_url = base_url.rstrip("/")
        self.selectors = selectors

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"

    # Navigation

    def navigate(self) -> None:
        """Open the Books page and wait for the table (or its empty state)."""
        self.web_actions.navigate_to_url(self.url)
        self.wait_for_books_to_load()

    def click_logo(self) -> None:
        self.web_actions.click_element(self.selectors.logo)

    def click_login_button(self) -> None:
        self.web_actions.click_element(self.selectors.login_button)

    def click_book_by_title(self, title: str) -> None:
        link = self.page.locator(self.selectors.book_link).filter(has_text=title).first
        self.web_actions.click_element(Target(link, f'book link "{title}"'))

    def current_url(self) -> str:
        return self.page.url

    def wait_for_url_change(self, pattern: TextPattern, timeout: float = 10000) -> bool:
        return self.web_actions.wait_for_url(pattern, timeout)

    # Page checks

    def verify_books_page_loaded(self) -> None:
        self.web_actions.verify_element_visible(self.selectors.page_title)
        self.web_actions.verify_element_text(self.selectors.page_title, "Book Store")
        self.web_actions.verify_url(re.compile(r".*/books"))

    def verify_page_title(self) -> None:
        self.web_actions.verify_page_title(re.compile("DEMOQA"))

    def verify_page_url(self) -> None:
        self.web_actions.verify_url(re.compile(r".*/books"))

    def verify_search_box_present(self) -> None:
        self.web_actions.verify_element_visible(self.selectors.search_box)

    def verify_table_structure_present(self) -> None:
        self.web_actions.verify_element_visible(self.selectors.books_container)

    def verify_book_visible(self, title: str) -> None:
        cell = self.page.locator(self.selectors.book_title).filter(has_text=title).first
        self.web_actions.verify_element_visible(
            Target(cell, f'book title "{title}"'),
            error_message=f'Book "{title}" is not visible. Visible titles: {self.visible_titles()}',
        )

    def verify_no_books_message(self, message: str = NO_ROWS_TEXT) -> None:
        self.web_actions.verify_element_visible(self.selectors.no_data_message)
        self.web_actions.verify_element_text(self.selectors.no_data_message, message)

    # Search

    def search(self, term: str) -> None:
        self.web_actions.fill_text(self.selectors.search_box, term)
        self.web_actions.click_element(self.selectors.search_button)
        self.web_actions.wait(SEARCH_SETTLE_DELAY)
        self.wait_for_books_to_load()

    def clear_search(self) -> None:
        self.web_actions.fill_text(self.selectors.search_box, "", clear=True)
        self.wait_for_books_to_load()

    # Rows

    def _rows_with_visible_title(self) -> list[Locator]:
        rows = self.page.locator(self.selectors.book_item).all()
        # Padding rows have no title link
        return [row for row in rows if row.locator(self.selectors.book_title).is_visible()]

    def get_visible_books(self) -> list[Book]:
        self.wait_for_books_to_load()
        books = []
        for row in self._rows_with_visible_title():
            books.append(
                Book(
                    title=_cell_text(row.locator(self.selectors.book_title)),
                    author=_cell_text(row.locator(self.selectors.book_author)),
                    publisher=_cell_text(row.locator(self.selectors.book_publisher)),
                )
            )
        return books

    def get_total_books_count(self) -> int:
        self.wait_for_books_to_load()
        return len(self._rows_with_visible_title())

    def visible_titles(self) -> list[str]:
        return [
            _cell_text(row.locator(self.selectors.book_title))
            for row in self._rows_with_visible_title()
        ]

    # Pagination

    def go_to_next_page(self) -> None:
        self._turn_page(self.selectors.next_button, "Next button is disabled - already on last page")

    def go_to_previous_page(self) -> None:
        self._turn_page(
            self.selectors.previous_button,
            "Previous button is disabled - already on first page",
        )

    def _turn_page(self, selector: str, disabled_message: str) -> None:
        button = Target(self.page.locator(selector).first, selector)
        button.visible(PAGINATION_TIMEOUT)
        if button.resolve().get_attribute("disabled") is not None:
            raise PaginationError(disabled_message)
        self.web_actions.click_element(button)
        self.wait_for_books_to_load()

    # User

    def is_user_logged_in(self, user_name_selector: str | None = None) -> bool:
        return self.web_actions.is_element_present(
            user_name_selector or self.selectors.user_name_value, timeout=LOGIN_CHECK_TIMEOUT
        )

    # Helpers

    def is_element_present(self, selector: str, timeout: float = 5000) -> bool:
        return self.web_actions.is_element_present(selector, timeout=timeout)

    def locator(self, selector: str) -> Locator:
        return self.page.locator(selector)

    def log_test_success(self, message: str) -> None:
        self.web_actions.log_success(message)

    def wait_for_books_to_load(self) -> None:
        """Wait for the spinner to go, then for rows or the "No rows found" state."""
        try:
            self.page.locator(self.selectors.loading_spinner).first.wait_for(
                state="hidden", timeout=SPINNER_TIMEOUT
            )
        except PlaywrightTimeout:
            print("Loading spinner still visible, checking results anyway")

        results = self.page.locator(self.selectors.results_body).first
        if Target(results, self.selectors.results_body).is_visible(RESULTS_TIMEOUT):
            return
        empty = self.page.locator(self.selectors.no_data_message).first
        Target(empty, self.selectors.no_data_message).visible(RESULTS_TIMEOUT)


def _cell_text(cell: Locator) -> str:
    return (cell.text_content() or "").strip()
