"""Output-location stack used while walking packages and capsules."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from rtdiagram.errors import ConfigurationError, InternalConsistencyError

logger = logging.getLogger(__name__)


class ScopeTracker:
    """Stack of directory segments below an output root.

    Use ``scope()`` rather than pairing ``enter()``/``leave()`` by hand; it
    pops the segment on every exit path, including exceptions.
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self._segments: list[str] = []

    @property
    def current(self) -> Path:
        """Directory of the active scope."""
        return self.root.joinpath(*self._segments)

    @property
    def depth(self) -> int:
        return len(self._segments)

    @property
    def segments(self) -> tuple[str, ...]:
        return tuple(self._segments)

    def enter(self, name: str) -> Path:
        """Push a segment and create its directory if absent."""
        self._segments.append(name)
        directory = self.current
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._segments.pop()
            raise ConfigurationError(f"Cannot create output directory {directory}: {e}") from e
        logger.debug(f"Entered scope {directory}")
        return directory

    def leave(self) -> None:
        """Pop the most recently entered segment."""
        if not self._segments:
            raise InternalConsistencyError("leave() called with no active scope")
        self._segments.pop()

    @contextmanager
    def scope(self, name: str) -> Iterator[Path]:
        directory = self.enter(name)
        try:
            yield directory
        finally:
            self.leave()
