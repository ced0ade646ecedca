"""Domain checks for the Books page, built on `BooksPage` queries.

Every failure message carries the actual and expected values and the titles
that were on screen, so a failing run can be diagnosed from the report alone.
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence, Union

from demoqa_verification.books.data import Book, ValidationData
from demoqa_verification.books.page import NO_ROWS_TEXT, BooksPage
from demoqa_verification.exceptions import PaginationError

Pattern = Union[str, re.Pattern[str]]

MARKUP_PATTERN = r"<[^>]*>"
MIN_BOOKS_FOR_PAGINATION = 10
BOOK_FIELDS = ("title", "author", "publisher")


def is_relevant(book: Book, term: str) -> bool:
    """True if `term` occurs, case-insensitively, in title, author or publisher."""
    needle = term.lower()
    return any(needle in field.lower() for field in (book.title, book.author, book.publisher))


def find_markup(value: str, patterns: Iterable[Pattern] = (MARKUP_PATTERN,)) -> str | None:
    """Return the first pattern (as source text) that matches `value`, if any."""
    for pattern in patterns:
        if re.search(pattern, value):
            return pattern.pattern if isinstance(pattern, re.Pattern) else pattern
    return None


def _titles(books: Sequence[Book]) -> str:
    return ", ".join(f'"{book.title}"' for book in books)


class BooksAssertions:
    def __init__(self, books_page: BooksPage) -> None:
        self.books_page = books_page
        self.web_actions = books_page.web_actions

    def expect_books_page_loaded(self, validation: ValidationData) -> None:
        with self.web_actions.step("Assert Books page is fully loaded"):
            self.web_actions.verify_url(validation.expected_url)
            self.web_actions.verify_page_title(validation.expected_title)
            for selector in validation.expected_elements:
                self.web_actions.verify_element_visible(selector)

    def expect_books_list_visible(self) -> None:
        with self.web_actions.step("Assert books list is visible"):
            count = self.books_page.get_total_books_count()
            with self.web_actions.step(f"Found {count} books on page"):
                assert count > 0, f"Expected at least 1 book on the page, but found {count}"

            books = self.books_page.get_visible_books()
            with self.web_actions.step(f"Verified {len(books)} visible books with complete data"):
                assert books, (
                    f"Expected visible book records, but none were extracted "
                    f"(row count was {count})"
                )

            first = books[0]
            with self.web_actions.step(f'Validate first book data: "{first.title}" by {first.author}'):
                assert first.title and first.author and first.publisher, (
                    f"Expected the first book to have title, author and publisher, but found "
                    f'title="{first.title}", author="{first.author}", publisher="{first.publisher}"'
                )

            self.web_actions.verify_element_visible(self.books_page.selectors.books_container)

    def expect_book_present(self, expected: Book) -> None:
        with self.web_actions.step(f'Assert book "{expected.title}" is present'):
            self.books_page.verify_book_visible(expected.title)

            books = self.books_page.get_visible_books()
            found = next(
                (
                    book
                    for book in books
                    if expected.title in book.title or expected.author in book.author
                ),
                None,
            )
            assert found is not None, (
                f'Expected to find book "{expected.title}" by author "{expected.author}" in the '
                f"books list, but it was not among {len(books)} visible books. "
                f"Available books: {_titles(books)}"
            )
            assert expected.title in found.title, (
                f'Expected book title to contain "{expected.title}", but found "{found.title}"'
            )
            assert expected.author in found.author, (
                f'Expected book author to contain "{expected.author}", but found "{found.author}"'
            )
            assert expected.publisher in found.publisher, (
                f'Expected book publisher to contain "{expected.publisher}", '
                f'but found "{found.publisher}"'
            )

    def expect_search_results(
        self, term: str, expected_count: int, should_find_books: bool
    ) -> None:
        """Check a search outcome.

        `expected_count` is approximate: a positive value only requires some
        relevant result, zero requires an empty table.
        """
        with self.web_actions.step(f'Assert search results for "{term}"'):
            if not should_find_books:
                self.expect_no_search_results()
                return

            actual = self.books_page.get_total_books_count()
            if expected_count > 0:
                assert actual > 0, (
                    f'Expected search for "{term}" to return at least 1 book, '
                    f"but found {actual} books"
                )
                books = self.books_page.get_visible_books()
                relevant = [book for book in books if is_relevant(book, term)]
                assert relevant, (
                    f'Expected at least 1 book to be relevant to search term "{term}", but found '
                    f"0 relevant books out of {len(books)} total results. "
                    f"Books found: {_titles(books)}"
                )
            else:
                assert actual == 0, (
                    f'Expected search for "{term}" to return exactly 0 books, '
                    f"but found {actual} books: {self.books_page.visible_titles()}"
                )

    def expect_no_search_results(self, message: str = NO_ROWS_TEXT) -> None:
        with self.web_actions.step("Assert no search results found"):
            self.books_page.verify_no_books_message(message)
            count = self.books_page.get_total_books_count()
            assert count == 0, (
                f"Expected no search results (count should be 0), but found {count} books: "
                f"{self.books_page.visible_titles()}. The \"No rows found\" message should be "
                f"the only thing shown when no books match."
            )

    def expect_successful_search(self, term: str) -> None:
        with self.web_actions.step(f'Assert successful search for "{term}"'):
            books = self.books_page.get_visible_books()
            assert books, (
                f'Expected search for "{term}" to return at least 1 book, but found 0 books'
            )
            assert any(is_relevant(book, term) for book in books), (
                f'Expected at least one book to contain the search term "{term}" in title, '
                f"author, or publisher, but none of the {len(books)} results were relevant. "
                "Books found: "
                + ", ".join(f'"{book.title}" by {book.author}' for book in books)
            )

    def expect_book_navigation(self, title: str, expected_url: str | re.Pattern[str]) -> None:
        with self.web_actions.step(f'Assert navigation to book "{title}"'):
            self.web_actions.verify_url(expected_url)

    def expect_user_authenticated(
        self, authenticated: bool, user_name_selector: str | None = None
    ) -> None:
        state = "authenticated" if authenticated else "not authenticated"
        with self.web_actions.step(f"Assert user is {state}"):
            actual = self.books_page.is_user_logged_in(user_name_selector)
            assert actual == authenticated, (
                f"Expected user authentication state to be {authenticated}, but found {actual}"
            )

    def expect_valid_book_data(
        self,
        book: Book,
        invalid_patterns: Iterable[Pattern] = (MARKUP_PATTERN,),
        position: int | None = None,
        fields: Iterable[str] = BOOK_FIELDS,
    ) -> None:
        """Each of `fields` must be filled and free of markup."""
        label = f"Book #{position}" if position is not None else "Book"
        patterns = tuple(invalid_patterns)
        with self.web_actions.step(f'Assert book data is valid for "{book.title}"'):
            for name in fields:
                value = getattr(book, name)
                assert value, (
                    f'{label} ("{book.title}") {name} should not be empty, but found: "{value}"'
                )
                pattern = find_markup(value, patterns)
                assert pattern is None, (
                    f'{label} {name} should be plain text, but "{value}" matches {pattern}'
                )

    def expect_complete_book_information(
        self, invalid_patterns: Iterable[Pattern] = (MARKUP_PATTERN,)
    ) -> None:
        with self.web_actions.step("Assert all books have complete information"):
            patterns = tuple(invalid_patterns)
            for position, book in enumerate(self.books_page.get_visible_books(), start=1):
                self.expect_valid_book_data(book, patterns, position=position)

    def expect_pagination_working(self, min_books: int = MIN_BOOKS_FOR_PAGINATION) -> None:
        """Page 2 must differ from page 1, and going back must restore page 1.

        Result sets below `min_books`, or a disabled next button, are
        inconclusive and pass.
        """
        with self.web_actions.step("Assert pagination is working correctly"):
            first_page = [book.title for book in self.books_page.get_visible_books()]
            if len(first_page) < min_books:
                self.web_actions.log_success(
                    f"Cannot test pagination with only {len(first_page)} books; "
                    f"at least {min_books} are needed"
                )
                return

            try:
                self.books_page.go_to_next_page()
            except PaginationError as exc:
                self.web_actions.log_success(
                    f"Pagination not available with {len(first_page)} books: {exc}"
                )
                return

            next_page = [book.title for book in self.books_page.get_visible_books()]
            assert next_page != first_page, (
                "Expected books on next page to be different from first page, but found the "
                f"same books. Initial page titles: {first_page}. Next page titles: {next_page}"
            )

            self.books_page.go_to_previous_page()
            restored = [book.title for book in self.books_page.get_visible_books()]
            assert restored == first_page, (
                "Expected going back to restore the first page. "
                f"First page titles: {first_page}. After going back: {restored}"
            )

    def expect_search_clearable(self) -> None:
        with self.web_actions.step("Assert search can be cleared"):
            self.books_page.clear_search()
            count = self.books_page.get_total_books_count()
            assert count > 0, f"Expected books to be listed after clearing the search, but found {count}"

    def expect_login_button_visible(self, selector: str | None = None) -> None:
        with self.web_actions.step("Assert login button is visible"):
            self.web_actions.verify_element_visible(
                selector or self.books_page.selectors.login_button,
                error_message=(
                    "Expected login button to be visible when user is not authenticated, "
                    "but it was not found or not visible on the page"
                ),
            )
