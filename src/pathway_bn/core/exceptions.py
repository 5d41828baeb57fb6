"""
pathway_bn Exceptions
=====================
All three errors are fatal: graph construction aborts and nothing is
emitted.
"""


class PathwayError(Exception):
    """Base class for errors raised while building a pathway factor graph"""


class MalformedInputError(PathwayError, ValueError):
    """An input line has the wrong number of fields or an invalid value"""

    def __init__(self, message: str, source: str = "", line_number: int = 0):
        self.source = source
        self.line_number = line_number
        if source and line_number:
            message = f"{source}:{line_number}: {message}"
        elif source:
            message = f"{source}: {message}"
        super().__init__(message)


class UnknownInteractionError(PathwayError, LookupError):
    """An interaction label is not present in the interaction map"""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Unrecognized interaction type: {label!r}")


class InternalConsistencyError(PathwayError, RuntimeError):
    """A generated factor does not have the expected shape"""
