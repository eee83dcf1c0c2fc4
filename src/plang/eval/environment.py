"""Variable environment for one program run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from plang.eval.value import Value


@dataclass
class Environment:
    """Flat mapping from variable name to value.

    There is no scoping: a binding for an existing name replaces it.
    """

    bindings: dict[str, Value] = field(default_factory=dict)

    def bind(self, name: str, value: Value) -> None:
        self.bindings[name] = value

    def lookup(self, name: str) -> Value | None:
        """Return the value bound to name, or None if unbound."""
        return self.bindings.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.bindings

    def __iter__(self) -> Iterator[str]:
        return iter(self.bindings)

    def __len__(self) -> int:
        return len(self.bindings)

    def __str__(self) -> str:
        return f"Environment({len(self.bindings)} bindings)"
