# almanac/errors.py
"""
Almanac Error Types

Error Hierarchy:
────────────────
┌─────────────────────────────────────────────────────────────────────┐
│  AlmanacError (base)                                                │
│  ├── ParseError             - Malformed input text (has a kind)     │
│  ├── StructuralError        - Well-formed text, wrong shape         │
│  ├── OverlappingRulesError  - Two rules of one stage overlap        │
│  └── InvariantViolation     - Internal contract breach (a bug)      │
└─────────────────────────────────────────────────────────────────────┘

Error Codes:
────────────
Each error carries a stable code ``ALM-XXXX``:
  - 1000-1999: Parse errors
  - 2000-2999: Structural errors
  - 3000-3999: Rule overlap
  - 9000-9999: Invariant violations (should never happen)

Every error is fatal for a run: the CLI aborts without printing a partial
answer.
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Optional


@unique
class ErrorCode(Enum):
    """Stable identifiers for every error the package raises."""

    SYNTAX = "ALM-1000"
    NON_NUMERIC = "ALM-1001"
    FIELD_COUNT = "ALM-1002"
    OUT_OF_RANGE = "ALM-1003"
    NEGATIVE_LENGTH = "ALM-1004"
    NEGATIVE_SEED = "ALM-1005"

    MISSING_STAGE = "ALM-2000"
    EMPTY_STAGE = "ALM-2001"
    UNEXPECTED_STAGE = "ALM-2002"
    RULE_OUTSIDE_STAGE = "ALM-2003"
    ODD_SEED_COUNT = "ALM-2004"
    EMPTY_SEED_RANGE = "ALM-2005"
    NO_SEEDS = "ALM-2006"
    TOO_MANY_VALUES = "ALM-2007"

    OVERLAPPING_RULES = "ALM-3000"

    INVARIANT = "ALM-9000"


@unique
class ParseErrorKind(Enum):
    """What exactly was wrong with the text."""

    SYNTAX = "syntax"
    NON_NUMERIC = "non-numeric token"
    FIELD_COUNT = "wrong field count"
    OUT_OF_RANGE = "number out of 64-bit range"
    NEGATIVE_LENGTH = "negative rule length"
    NEGATIVE_SEED = "negative seed value"

    @property
    def code(self) -> ErrorCode:
        return ErrorCode[self.name]


class AlmanacError(Exception):
    """Base class of every error raised by :mod:`almanac`."""

    default_code: ErrorCode = ErrorCode.INVARIANT

    def __init__(
        self,
        message: str,
        *,
        code: Optional[ErrorCode] = None,
        line: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.line = line

    def __str__(self) -> str:
        prefix = f"line {self.line}: " if self.line is not None else ""
        return f"{prefix}{self.message} [{self.code.value}]"


class ParseError(AlmanacError):
    """The input text could not be read as an almanac."""

    default_code = ErrorCode.SYNTAX

    def __init__(
        self,
        message: str,
        *,
        kind: ParseErrorKind = ParseErrorKind.SYNTAX,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        super().__init__(message, code=kind.code, line=line)
        self.kind = kind
        self.column = column

    def __str__(self) -> str:
        if self.line is not None and self.column is not None:
            return f"line {self.line}, column {self.column}: {self.message} [{self.code.value}]"
        return super().__str__()


class StructuralError(AlmanacError):
    """The text parsed, but the almanac it describes is not usable."""

    default_code = ErrorCode.MISSING_STAGE


class OverlappingRulesError(AlmanacError):
    """Two rules inside a single stage cover a common input value."""

    default_code = ErrorCode.OVERLAPPING_RULES

    def __init__(self, stage: str, first_line: Optional[int],
                 second_line: Optional[int], message: str) -> None:
        super().__init__(message, line=second_line)
        self.stage = stage
        self.first_line = first_line
        self.second_line = second_line


class InvariantViolation(AlmanacError):
    """An internal contract was broken; this indicates a bug upstream."""

    default_code = ErrorCode.INVARIANT
