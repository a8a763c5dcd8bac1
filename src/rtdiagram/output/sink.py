"""Document sinks persisting finished diagram sources."""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class DocumentSink(ABC):
    """Destination for finished documents."""

    def __init__(self):
        self.written: list[Path] = []

    @abstractmethod
    def write(self, directory: Path, file_name: str, content: str) -> Path:
        """Persist one document and return where it went."""
        pass


class FileDocumentSink(DocumentSink):
    """Write each document to the filesystem in a single atomic replace."""

    def __init__(self, encoding: str = "utf-8"):
        super().__init__()
        self.encoding = encoding

    def write(self, directory: Path, file_name: str, content: str) -> Path:
        directory = Path(directory)
        target = directory / file_name

        fd, temp_name = tempfile.mkstemp(prefix=f".{file_name}.", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding=self.encoding, newline="\n") as f:
                f.write(content)
                if not content.endswith("\n"):
                    f.write("\n")
            os.replace(temp_name, target)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise

        self.written.append(target)
        logger.debug(f"Wrote {target}")
        return target


class MemoryDocumentSink(DocumentSink):
    """Keep documents in memory, keyed by their would-be path."""

    def __init__(self):
        super().__init__()
        self.documents: dict[Path, str] = {}

    def write(self, directory: Path, file_name: str, content: str) -> Path:
        target = Path(directory) / file_name
        self.documents[target] = content
        self.written.append(target)
        return target
