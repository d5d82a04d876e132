from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from typing import Iterator

from contractdiff.config import Config
from contractdiff.openapi.models import Document

RefPair = tuple[str, str]


@dataclass
class State:
    """
    Reference pairs currently being diffed on the active recursion path.
    Created per top-level diff invocation and never shared.
    """

    in_progress: set[RefPair] = field(default_factory=set)

    def is_visiting(self, pair: RefPair) -> bool:
        return pair in self.in_progress

    @contextlib.contextmanager
    def visiting(self, pair: RefPair) -> Iterator[None]:
        self.in_progress.add(pair)
        try:
            yield
        finally:
            self.in_progress.discard(pair)


@dataclass
class DiffContext:
    """Everything a diff function needs besides the two values it compares."""

    config: Config
    base: Document
    revision: Document
    state: State = field(default_factory=State)
