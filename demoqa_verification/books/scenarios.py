"""Data-driven flows over the Books page.

Each flow reads its parameters from the scenario document. Inconclusive
outcomes (too few books to paginate, an unexpected destination after a
click) are logged as successes and the flow carries on.
"""

from __future__ import annotations

from demoqa_verification.books.assertions import BooksAssertions
from demoqa_verification.books.data import SearchScenario, TestScenarios
from demoqa_verification.books.page import NO_ROWS_TEXT, BooksPage

URL_CHANGE_TIMEOUT = 10000


class BookScenarios:
    def __init__(
        self,
        books_page: BooksPage,
        assertions: BooksAssertions,
        scenarios: TestScenarios,
    ) -> None:
        self.books_page = books_page
        self.assertions = assertions
        self.scenarios = scenarios

    def verify_book_click_navigation(self) -> None:
        config = self.scenarios.navigation_scenarios.book_click_navigation
        books = self.books_page.get_visible_books()
        if not books:
            self.books_page.log_test_success("No books available - navigation test skipped")
            return

        target = next((book for book in books if config.target_book in book.title), books[0])
        self.books_page.click_book_by_title(target.title)

        matched = None
        for pattern in config.expected_url_patterns:
            if self.books_page.wait_for_url_change(pattern, URL_CHANGE_TIMEOUT):
                matched = pattern.pattern
                break

        if matched is not None:
            self.books_page.log_test_success(f"Navigated to {self.books_page.current_url()} ({matched})")
        elif config.fallback_validation == "searchBoxPresent":
            self.books_page.web_actions.log_info(
                f"No expected URL pattern matched {self.books_page.current_url()}, "
                "checking the page is still usable"
            )
            self.books_page.verify_search_box_present()

        self.books_page.log_test_success(f"{config.description} - completed")

    def verify_pagination_functionality(self) -> None:
        config = self.scenarios.pagination_scenarios.pagination_check
        total = len(self.books_page.get_visible_books())

        if total < config.min_books_for_pagination:
            self.books_page.log_test_success(
                f"Limited books available ({total}) - no pagination required"
            )
            return

        present = any(
            self.books_page.is_element_present(selector)
            for selector in config.pagination_selectors
        )
        if present:
            self.books_page.log_test_success("Pagination controls detected and verified")
            self.assertions.expect_pagination_working(config.min_books_for_pagination)
        else:
            self.books_page.log_test_success(
                "No pagination needed - all books displayed on single page"
            )

        self.books_page.log_test_success(f"{config.description} - completed")

    def verify_partial_title_search(self, term: str | None = None) -> None:
        config = self.scenarios.search_scenarios.partial_title_search
        term = term or config.term

        self.books_page.search(term)
        if config.should_find_results:
            self.assertions.expect_successful_search(term)
            self._note_result_count(config, term)

        self.books_page.log_test_success(f'{config.description} - completed for "{term}"')

    def verify_authentication_state(self) -> None:
        config = self.scenarios.authentication_scenarios.unauthenticated_state
        if not self.books_page.is_user_logged_in(config.expected_user_name_field):
            self.assertions.expect_login_button_visible(config.expected_login_button)
        self.books_page.log_test_success(f"{config.description} - completed")

    def perform_multiple_search_operations(self, terms: list[str] | None = None) -> None:
        config = self.scenarios.multiple_search_operations
        for term in terms or config.rapid_searches:
            self.books_page.search(term)
            self.books_page.clear_search()

        self.books_page.verify_search_box_present()
        self.books_page.verify_table_structure_present()
        self.books_page.log_test_success(f"{config.description} - completed")

    def validate_book_data_consistency(self, max_books: int | None = None) -> None:
        config = self.scenarios.data_validation_scenarios.book_data_consistency
        limit = max_books or config.max_books_to_check

        books = self.books_page.get_visible_books()[:limit]
        for position, book in enumerate(books, start=1):
            self.assertions.expect_valid_book_data(
                book, config.invalid_patterns, position=position, fields=config.required_fields
            )

        self.books_page.log_test_success(f"{config.description} - validated {len(books)} books")

    def verify_page_state_after_operations(self) -> None:
        config = self.scenarios.multiple_search_operations
        for term in config.state_verification_searches:
            self.books_page.search(term)
            self.books_page.clear_search()

        self.assertions.expect_books_list_visible()
        self.books_page.verify_search_box_present()
        self.books_page.log_test_success("Page state maintained after multiple operations")

    def verify_special_character_search(self, term: str | None = None) -> None:
        config = self.scenarios.search_scenarios.special_character_search
        term = term or config.term

        self.books_page.search(term)
        self.books_page.verify_search_box_present()
        self.books_page.verify_table_structure_present()
        self.books_page.log_test_success(f'{config.description} - completed for "{term}"')

    def verify_long_search_term_handling(self, term: str | None = None) -> None:
        config = self.scenarios.search_scenarios.long_term_search
        term = term or config.term

        self.books_page.search(term)
        self.books_page.verify_search_box_present()

        if not config.should_find_results:
            # Results for a long term are acceptable too
            empty = self.books_page.is_element_present(self.books_page.selectors.no_data_message)
            self.books_page.web_actions.log_info(
                f'"No rows found" {"shown" if empty else "not shown"} for a {len(term)}-character term'
            )

        self.books_page.log_test_success(f"{config.description} - completed")

    def verify_basic_search(self) -> None:
        self._verify_configured_search(self.scenarios.search_scenarios.basic_search)

    def verify_author_search(self) -> None:
        self._verify_configured_search(self.scenarios.search_scenarios.author_search)

    def _note_result_count(self, config: SearchScenario, term: str) -> None:
        # Counts are a hint only; the live catalog changes
        if config.min_expected_results is None:
            return
        count = self.books_page.get_total_books_count()
        if count < config.min_expected_results:
            self.books_page.web_actions.log_warning(
                f'Expected at least {config.min_expected_results} results for "{term}", found {count}'
            )

    def _verify_configured_search(self, config: SearchScenario) -> None:
        self.books_page.search(config.term)
        if config.expected_book:
            self.books_page.verify_book_visible(config.expected_book)
        if config.should_find_results:
            self.assertions.expect_successful_search(config.term)
            self._note_result_count(config, config.term)
        self.books_page.log_test_success(f"{config.description} - completed")

    def verify_empty_search_results(self) -> None:
        config = self.scenarios.search_scenarios.empty_result_search
        self.books_page.search(config.term)
        if not config.should_find_results:
            self.assertions.expect_no_search_results(config.expected_message or NO_ROWS_TEXT)
        self.books_page.log_test_success(f"{config.description} - completed")
