"""Step tracing for the Allure report and the console."""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

import allure


@dataclass
class StepRecord:
    name: str
    outcome: str
    error: str | None = None


@dataclass
class StepLog:
    """Collects every traced step, in completion order."""

    records: list[StepRecord] = field(default_factory=list)

    @contextmanager
    def step(self, name: str) -> Iterator[None]:
        with allure.step(name):
            try:
                yield
            except BaseException as exc:
                self.records.append(StepRecord(name, "failed", str(exc)))
                print(f"STEP FAILED: {name}")
                raise
        self.records.append(StepRecord(name, "passed"))
        print(f"STEP: {name}")

    def names(self) -> list[str]:
        return [record.name for record in self.records]


def attach_png(name: str, body: bytes) -> None:
    allure.attach(body, name=name, attachment_type=allure.attachment_type.PNG)
