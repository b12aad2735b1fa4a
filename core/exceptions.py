from __future__ import annotations

from typing import Iterable, List


class ConfigurationError(ValueError):
    """Raised when a plan fails validation. The engine refuses to run on it."""

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors) or "invalid configuration")
