"""Test data for the Books page.

Scenario parameters live in `books_scenarios.json`; this module validates
them into typed, immutable models at load time.
"""

import json
import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from demoqa_verification.exceptions import ScenarioDataError

SCENARIOS_PATH = Path(__file__).with_name("books_scenarios.json")


class _Model(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )


class Book(_Model):
    """A catalog entry as listed on the Books page."""

    title: str
    author: str
    publisher: str
    isbn: str | None = None
    pages: int | None = None
    description: str | None = None


class SearchTestData(_Model):
    search_term: str
    # Approximate; only "some" vs "none" is ever asserted.
    expected_results: int
    should_find_books: bool


class ValidationData(_Model):
    expected_url: re.Pattern[str]
    expected_title: re.Pattern[str]
    expected_elements: tuple[str, ...]


class SearchScenario(_Model):
    term: str
    expected_book: str | None = None
    should_find_results: bool
    min_expected_results: int | None = None
    expected_message: str | None = None
    max_length: int | None = None
    description: str


class NavigationScenario(_Model):
    target_book: str
    expected_url_patterns: tuple[re.Pattern[str], ...]
    fallback_validation: Literal["searchBoxPresent", "none"]
    description: str


class SearchScenarios(_Model):
    basic_search: SearchScenario
    author_search: SearchScenario
    partial_title_search: SearchScenario
    empty_result_search: SearchScenario
    special_character_search: SearchScenario
    long_term_search: SearchScenario


class MultipleSearchOperations(_Model):
    rapid_searches: tuple[str, ...]
    state_verification_searches: tuple[str, ...]
    description: str


class NavigationScenarios(_Model):
    book_click_navigation: NavigationScenario


class PaginationScenario(_Model):
    min_books_for_pagination: int = Field(ge=1)
    pagination_selectors: tuple[str, ...]
    description: str


class PaginationScenarios(_Model):
    pagination_check: PaginationScenario


class AuthenticationScenario(_Model):
    expected_login_button: str
    expected_user_name_field: str
    description: str


class AuthenticationScenarios(_Model):
    unauthenticated_state: AuthenticationScenario


class DataValidationScenario(_Model):
    max_books_to_check: int = Field(ge=1)
    required_fields: tuple[Literal["title", "author", "publisher"], ...]
    invalid_patterns: tuple[re.Pattern[str], ...]
    description: str


class DataValidationScenarios(_Model):
    book_data_consistency: DataValidationScenario


class TestScenarios(_Model):
    """Root of the scenario document."""

    __test__ = False

    search_scenarios: SearchScenarios
    multiple_search_operations: MultipleSearchOperations
    navigation_scenarios: NavigationScenarios
    pagination_scenarios: PaginationScenarios
    authentication_scenarios: AuthenticationScenarios
    data_validation_scenarios: DataValidationScenarios


def _describe_errors(exc: ValidationError) -> list[str]:
    problems = []
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"]) or "<root>"
        if error["type"] == "missing":
            problems.append(f"{path}: required field is missing")
        else:
            problems.append(f"{path}: {error['msg']}")
    return problems


def parse_test_scenarios(raw: dict, source: str = "<memory>") -> TestScenarios:
    """Validate a decoded scenario document.

    Raises:
        ScenarioDataError: Listing every missing or invalid field.
    """
    try:
        return TestScenarios.model_validate(raw)
    except ValidationError as exc:
        raise ScenarioDataError(source, _describe_errors(exc)) from exc


def load_test_scenarios(path: Path | str | None = None) -> TestScenarios:
    """Load and validate the scenario document (the bundled one by default)."""
    path = Path(path) if path is not None else SCENARIOS_PATH
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ScenarioDataError(str(path), [f"cannot be read: {exc}"]) from exc
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ScenarioDataError(str(path), [f"not valid JSON: {exc}"]) from exc
    return parse_test_scenarios(raw, source=str(path))


# Books listed on DemoQA
KNOWN_BOOKS: tuple[Book, ...] = (
    Book(
        title="Git Pocket Guide",
        author="Richard E. Silverman",
        publisher="O'Reilly Media",
        isbn="9781449325862",
        pages=234,
        description="A Working Introduction",
    ),
    Book(
        title="Learning JavaScript Design Patterns",
        author="Addy Osmani",
        publisher="O'Reilly Media",
        isbn="9781449331818",
        pages=254,
        description="A JavaScript and React Developer's Guide",
    ),
    Book(
        title="Designing Evolvable Web APIs with ASP.NET",
        author="Glenn Block et al.",
        publisher="O'Reilly Media",
        isbn="9781449337711",
        pages=538,
        description="Harnessing the Power of the Web",
    ),
    Book(
        title="Speaking JavaScript",
        author="Axel Rauschmayer",
        publisher="O'Reilly Media",
        isbn="9781449365035",
        pages=460,
        description="An In-Depth Guide for Programmers",
    ),
    Book(
        title="You Don't Know JS",
        author="Kyle Simpson",
        publisher="O'Reilly Media",
        isbn="9781491904244",
        pages=278,
        description="ES6 & Beyond",
    ),
    Book(
        title="Programming JavaScript Applications",
        author="Eric Elliott",
        publisher="O'Reilly Media",
        isbn="9781491950296",
        pages=254,
        description="Robust Web Architecture with Node, HTML5, and Modern JS Libraries",
    ),
    Book(
        title="Eloquent JavaScript, Second Edition",
        author="Marijn Haverbeke",
        publisher="No Starch Press",
        isbn="9781593275846",
        pages=472,
        description="A Modern Introduction to Programming",
    ),
    Book(
        title="Understanding ECMAScript 6",
        author="Nicholas C. Zakas",
        publisher="No Starch Press",
        isbn="9781593277574",
        pages=352,
        description="The Definitive Guide for JavaScript Developers",
    ),
)


def known_book(title: str) -> Book:
    for book in KNOWN_BOOKS:
        if book.title == title:
            return book
    raise KeyError(title)


SEARCH_TEST_CASES: tuple[SearchTestData, ...] = (
    SearchTestData(search_term="JavaScript", expected_results=4, should_find_books=True),
    SearchTestData(search_term="Git", expected_results=1, should_find_books=True),
    SearchTestData(search_term="Python", expected_results=0, should_find_books=False),
    SearchTestData(search_term="O'Reilly", expected_results=5, should_find_books=True),
    SearchTestData(search_term="NonExistentBook12345", expected_results=0, should_find_books=False),
)

PAGE_VALIDATION = ValidationData(
    expected_url=r".*/books",
    expected_title=r"DEMOQA",
    expected_elements=(
        "#searchBox",
        ".ReactTable",
        ".rt-table",
        ".rt-thead",
        ".rt-tbody",
    ),
)

URLS = {
    "books": "/books",
    "profile": "/profile",
    "login": "/login",
}
