"""Error types raised by the verification suite."""


class ConfigurationError(Exception):
    """Run configuration is invalid (e.g. unknown environment profile)."""


class ScenarioDataError(ValueError):
    """The scenario/test-data document failed validation."""

    def __init__(self, source: str, problems: list[str]) -> None:
        self.source = source
        self.problems = problems
        details = "\n".join(f"  - {problem}" for problem in problems)
        super().__init__(f"Invalid scenario data in {source}:\n{details}")


class InteractionTimeout(Exception):
    """An element never reached the required state within its timeout."""

    def __init__(self, selector: str, state: str, timeout: float) -> None:
        self.selector = selector
        self.state = state
        self.timeout = timeout
        super().__init__(
            f"Element '{selector}' did not become {state} within {timeout:.0f}ms"
        )


class PaginationError(Exception):
    """A pagination control is disabled."""
