"""Error taxonomy and result values for the labeler.

Parsing and validation return ``Ok``/``Err`` instead of raising, so a bad
input can be reported with its field path and never leaves a half-built
configuration behind. Only the I/O layer raises (``LabelerError`` and
subclasses).
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed result carrying an error value."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


Result = Union[Ok[T], Err[E]]


@dataclass(frozen=True)
class ConfigurationError:
    """A configuration value failed validation."""
    field: str
    value: Any
    message: str

    def __str__(self) -> str:
        return f"Configuration error in '{self.field}': {self.message} (got {self.value!r})"


@dataclass(frozen=True)
class ParseError:
    """A structured input (JSON, size string) could not be parsed."""
    input: str
    message: str

    def __str__(self) -> str:
        return f"Parse error: {self.message} (input: {self.input!r})"


@dataclass(frozen=True)
class FileAnalysisError:
    """A changed file could not be measured."""
    file: str
    message: str

    def __str__(self) -> str:
        return f"Failed to analyze {self.file}: {self.message}"


class LabelerError(Exception):
    """Base exception for failures in the I/O layer."""


class GitHubAPIError(LabelerError):
    """A GitHub API call failed."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
