from demoqa_verification.books.assertions import BooksAssertions
from demoqa_verification.books.data import Book, TestScenarios, load_test_scenarios
from demoqa_verification.books.page import BooksPage
from demoqa_verification.books.scenarios import BookScenarios
from demoqa_verification.books.selectors import BOOKS_PAGE_SELECTORS, BooksPageSelectors

__all__ = [
    "BOOKS_PAGE_SELECTORS",
    "Book",
    "BookScenarios",
    "BooksAssertions",
    "BooksPage",
    "BooksPageSelectors",
    "TestScenarios",
    "load_test_scenarios",
]
