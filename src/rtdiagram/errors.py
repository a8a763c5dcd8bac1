"""Exception types raised by rtdiagram."""


class RtDiagramError(Exception):
    """Base class for all rtdiagram errors."""
    pass


class ConfigurationError(RtDiagramError):
    """Raised when the output location or configuration cannot be used.

    Always raised before any document is emitted.
    """
    pass


class InternalConsistencyError(RtDiagramError):
    """Raised when the generator detects a bug in its own assembly."""
    pass


class ReflowError(InternalConsistencyError):
    """Raised when reflow meets a closing brace with no open brace."""

    def __init__(self, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(f"Unbalanced '}}' at line {line_number}: {line!r}")
