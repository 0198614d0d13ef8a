"""Models for the test descriptors supplied by the caller."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class TestDescriptor[D]:
    """Static description of a single test or benchmark.

    The payload is never inspected by the harness; callers use it to carry
    whatever their evaluation function needs (a file path, a parsed case...).
    """

    __test__ = False

    name: str
    kind: str = ""
    is_ignored: bool = False
    is_bench: bool = False
    payload: D | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Test name must not be empty")

    @classmethod
    def test(
        cls, name: str, payload: D | None = None, *, kind: str = ""
    ) -> "TestDescriptor[D]":
        """Create a plain, non-ignored test."""
        return cls(name=name, kind=kind, payload=payload)

    @classmethod
    def bench(
        cls, name: str, payload: D | None = None, *, kind: str = ""
    ) -> "TestDescriptor[D]":
        """Create a non-ignored benchmark."""
        return cls(name=name, kind=kind, is_bench=True, payload=payload)

    @property
    def display_kind(self) -> str:
        """Kind label as rendered before the name, e.g. ``[lint] ``."""
        return f"[{self.kind}] " if self.kind else ""
