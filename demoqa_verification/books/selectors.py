"""CSS selectors for the DemoQA Books page (a ReactTable listing)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BooksPageSelectors:
    # Navigation
    logo: str = ".header-wrapper .header-left img"
    home_link: str = ".header-wrapper .header-left a"

    # Main section
    main_banner: str = ".main-banner"
    page_title: str = ".main-header"

    # Search bar
    search_box: str = "#searchBox"
    search_button: str = "#basic-addon2"

    # Book list; cells are relative to a row
    books_container: str = ".ReactTable"
    results_body: str = ".rt-tbody"
    book_item: str = ".rt-tr-group"
    book_title: str = ".rt-td:nth-child(2) span a"
    book_author: str = ".rt-td:nth-child(3)"
    book_publisher: str = ".rt-td:nth-child(4)"
    book_image: str = ".rt-td:nth-child(1) img"
    book_link: str = ".rt-td:nth-child(2) span a"

    # User
    login_button: str = "#login"
    user_name_value: str = "#userName-value"

    # Pagination
    pagination_container: str = ".pagination-bottom"
    next_button: str = ".-next button"
    previous_button: str = ".-previous button"
    page_jump: str = ".-pageJump input"

    sort_header: str = ".rt-th .rt-resizable-header-content"

    loading_spinner: str = ".rt-loading"
    no_data_message: str = ".rt-noData"


BOOKS_PAGE_SELECTORS = BooksPageSelectors()
