from __future__ import annotations


class LegtoolsError(Exception):
    """Validation failure raised before any legend mutation."""

    kind = "Error"

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation

    @property
    def identifier(self) -> str:
        if self.operation is None:
            return f"legtools:{self.kind}"
        return f"legtools:{self.operation}:{self.kind}"

    def __str__(self) -> str:
        return f"{self.identifier}: {super().__str__()}"


class UnsupportedHostVersionError(LegtoolsError, RuntimeError):
    kind = "UnsupportedHostVersion"


class InvalidLegendHandleError(LegtoolsError, TypeError):
    kind = "InvalidLegendHandle"


class EmptyStringInputError(LegtoolsError, ValueError):
    kind = "EmptyStringInput"


class IndexCountMismatchError(LegtoolsError, ValueError):
    kind = "TooManyIndices"


class NonUniqueIndicesError(LegtoolsError, ValueError):
    kind = "NotEnoughUniqueIndices"


class IndexOutOfRangeError(LegtoolsError, IndexError):
    kind = "IndexOutOfRange"


class TooManyStyleSetsError(LegtoolsError, ValueError):
    kind = "TooManyStyleSets"


class InvalidStyleError(LegtoolsError, TypeError):
    kind = "InvalidStyle"


class EntryCountMismatchError(LegtoolsError, ValueError):
    kind = "EntryCountMismatch"
