"""Custom exceptions for z-xcmake."""


class XcmakeError(Exception):
    """Base exception for all translator errors."""


class TraceOpenError(XcmakeError):
    """Raised when the captured build trace cannot be opened."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot open build trace {path}: {reason}")


class RuleFileError(XcmakeError):
    """Raised when the rule file cannot be written or replaced."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot write rule file {path}: {reason}")


class DirectoryContextError(XcmakeError):
    """Raised when a record header is not followed by its ``cd <path>`` line."""

    def __init__(self, line_no: int, header: str, found: str | None):
        self.line_no = line_no
        self.header = header
        self.found = found
        got = "end of trace" if found is None else repr(found)
        super().__init__(
            f"Line {line_no}: expected 'cd <path>' after record {header!r}, got {got}"
        )
