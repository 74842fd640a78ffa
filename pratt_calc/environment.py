from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Tuple

from .errors import UndefinedVariable


class Environment:
    """Mapping from variable name to its last assigned value.

    Entries are only ever created or overwritten; reading a name that was
    never assigned raises UndefinedVariable.
    """

    def __init__(self, values: Optional[Dict[str, int]] = None):
        self._values: Dict[str, int] = dict(values or {})

    def get(self, name: str) -> int:
        if name not in self._values:
            raise UndefinedVariable(name)
        return self._values[name]

    def set(self, name: str, value: int) -> None:
        self._values[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def items(self) -> Iterator[Tuple[str, int]]:
        return iter(sorted(self._values.items()))

    def snapshot(self) -> Dict[str, int]:
        return dict(self._values)

    def restore(self, snapshot: Dict[str, int]) -> None:
        self._values = dict(snapshot)

    @contextmanager
    def transaction(self) -> Iterator["Environment"]:
        """Roll back every assignment made inside the block if it raises."""
        saved = self.snapshot()
        try:
            yield self
        except BaseException:
            self.restore(saved)
            raise

    def __repr__(self) -> str:
        return f"Environment({self._values!r})"
