"""Invariants of the mimetic operators, checked on operator input/output pairs."""
from dataclasses import dataclass
from abc import ABC, abstractmethod
from typing import Any


@dataclass
class InvariantResult:
    """Outcome of one invariant on one input/output pair."""
    passed: bool
    name: str
    value: float
    tolerance: float
    message: str = ""


class Invariant(ABC):
    """A property relating an operator's input to its output."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def check(self, field_in: Any, field_out: Any) -> InvariantResult:
        """Evaluate the invariant for one application of an operator."""
        pass


def format_failure(result: InvariantResult, label: str) -> str:
    """One block per failure: where, what, and by how much."""
    lines = [f"[{label}] {result.name}: {result.value:.2e} > {result.tolerance:.2e}"]
    if result.message:
        lines.append(f"    {result.message}")
    return "\n".join(lines)


def format_failures(failures: list[tuple[str, InvariantResult]]) -> str:
    return "\n".join(format_failure(r, label) for label, r in failures)
