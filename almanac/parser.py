"""almanac/parser.py – input text → :class:`Almanac`.

Surface syntax
--------------
::

    seeds: 79 14 55 13

    seed-to-soil map:
    50 98 2
    52 50 48

    soil-to-fertilizer map:
    0 15 37
    ...

The first non-blank line lists the seeds.  Each of the seven stages then
follows in fixed order: a ``<name> map:`` header and one or more
``<destination> <source> <length>`` rule lines.  Blank lines are ignored.

Design
------
* **Line-level PEG grammar** (Parsimonious).  The grammar only splits the
  text into seed, header and rule lines of whitespace-separated tokens;
  numbers are validated by the visitor so that a bad token is reported as
  :attr:`ParseErrorKind.NON_NUMERIC` / :attr:`ParseErrorKind.FIELD_COUNT`
  with its line number rather than as a generic syntax error.
* **Single linear pass** over the visited lines, tracking the current
  stage index explicitly.
* **Fail-fast** – the first problem raises; nothing is partially returned.

Public API
----------
``parse_almanac(text: str) -> Almanac``
``load_almanac(path) -> Almanac``
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, NamedTuple, Optional, Sequence, Tuple, Union

from parsimonious.exceptions import ParseError as GrammarParseError
from parsimonious.grammar import Grammar
from parsimonious.nodes import Node, NodeVisitor

from .arith import in_range
from .errors import (
    AlmanacError,
    ErrorCode,
    ParseError,
    ParseErrorKind,
    StructuralError,
)
from .pipeline import STAGE_NAMES

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════
#  Grammar
# ═══════════════════════════════════════════════════════════════════════

ALMANAC_GRAMMAR = Grammar(r'''
    almanac         = blank_line* seeds_line line*

    seeds_line      = hspace? "seeds:" seed_values hspace? eol
    seed_values     = (hspace token)*

    line            = blank_line / header_line / rule_line
    blank_line      = (hspace? newline) / (hspace end)
    header_line     = hspace? stage_name " map:" hspace? eol
    rule_line       = hspace? token (hspace token)* hspace? eol

    stage_name      = ~r"[A-Za-z]+(?:-[A-Za-z]+)*"
    token           = ~r"[^\s]+"
    hspace          = ~r"[ \t]+"
    newline         = ~r"\r?\n"
    eol             = newline / end
    end             = !~r"[\s\S]"
''')


# ═══════════════════════════════════════════════════════════════════════
#  Result types
# ═══════════════════════════════════════════════════════════════════════

class Rule(NamedTuple):
    """One ``destination source length`` line of a stage."""

    destination: int
    source: int
    length: int
    line: Optional[int] = None

    def as_text(self) -> str:
        return f"{self.destination} {self.source} {self.length}"


@dataclass(frozen=True)
class Almanac:
    """Seeds plus the rules of the seven stages, in pipeline order."""

    seeds: Tuple[int, ...]
    stages: Tuple[Tuple[Rule, ...], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "seeds", tuple(self.seeds))
        object.__setattr__(self, "stages", tuple(tuple(rules) for rules in self.stages))
        if len(self.stages) < len(STAGE_NAMES):
            raise StructuralError(
                f"missing stage {STAGE_NAMES[len(self.stages)]!r}",
                code=ErrorCode.MISSING_STAGE,
            )
        if len(self.stages) > len(STAGE_NAMES):
            raise StructuralError(
                f"expected {len(STAGE_NAMES)} stages, got {len(self.stages)}",
                code=ErrorCode.MISSING_STAGE,
            )
        for name, rules in zip(STAGE_NAMES, self.stages):
            if not rules:
                raise StructuralError(
                    f"stage {name} has no rules", code=ErrorCode.EMPTY_STAGE
                )


# ═══════════════════════════════════════════════════════════════════════
#  Visitor
# ═══════════════════════════════════════════════════════════════════════

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True, slots=True)
class _Token:
    text: str
    line: int


@dataclass(frozen=True, slots=True)
class _SeedsLine:
    tokens: Tuple[_Token, ...]
    line: int


@dataclass(frozen=True, slots=True)
class _Header:
    name: str
    line: int


@dataclass(frozen=True, slots=True)
class _RuleLine:
    tokens: Tuple[_Token, ...]
    line: int


_Event = Union[_Header, _RuleLine]


def _flatten(children: Sequence[Any]) -> List[Any]:
    flat: List[Any] = []
    for child in children:
        if isinstance(child, list):
            flat.extend(child)
        elif child is not None:
            flat.append(child)
    return flat


def _number(token: _Token) -> int:
    if not _INTEGER.fullmatch(token.text):
        raise ParseError(
            f"expected a number, got {token.text!r}",
            kind=ParseErrorKind.NON_NUMERIC,
            line=token.line,
        )
    value = int(token.text)
    if not in_range(value):
        raise ParseError(
            f"{token.text} does not fit in a signed 64-bit integer",
            kind=ParseErrorKind.OUT_OF_RANGE,
            line=token.line,
        )
    return value


class AlmanacBuilder(NodeVisitor):
    """Turns the Parsimonious parse tree into an :class:`Almanac`."""

    grammar = ALMANAC_GRAMMAR
    unwrapped_exceptions = (AlmanacError,)

    def __init__(self, text: str) -> None:
        self._text = text

    def _line_of(self, node: Node) -> int:
        return self._text.count("\n", 0, node.start) + 1

    def generic_visit(self, node, visited_children):
        """Anonymous and whitespace nodes collapse into a flat list."""
        return _flatten(visited_children)

    # ── leaves ──────────────────────────────────────────────────────

    def visit_token(self, node, visited_children):
        return _Token(node.text, self._line_of(node))

    def visit_stage_name(self, node, visited_children):
        return node.text

    # ── lines ───────────────────────────────────────────────────────

    def visit_seeds_line(self, node, visited_children):
        tokens = tuple(c for c in _flatten(visited_children) if isinstance(c, _Token))
        return _SeedsLine(tokens, self._line_of(node))

    def visit_header_line(self, node, visited_children):
        name = next(c for c in _flatten(visited_children) if isinstance(c, str))
        return _Header(name, self._line_of(node))

    def visit_rule_line(self, node, visited_children):
        tokens = tuple(c for c in _flatten(visited_children) if isinstance(c, _Token))
        return _RuleLine(tokens, self._line_of(node))

    # ── document ────────────────────────────────────────────────────

    def visit_almanac(self, node, visited_children):
        items = _flatten(visited_children)
        seeds_line = items[0]
        events: List[_Event] = items[1:]
        return Almanac(
            seeds=self._seeds(seeds_line),
            stages=self._stages(events),
        )

    @staticmethod
    def _seeds(seeds_line: _SeedsLine) -> Tuple[int, ...]:
        seeds = []
        for token in seeds_line.tokens:
            value = _number(token)
            if value < 0:
                raise ParseError(
                    f"seed {value} is negative",
                    kind=ParseErrorKind.NEGATIVE_SEED,
                    line=token.line,
                )
            seeds.append(value)
        return tuple(seeds)

    @staticmethod
    def _rule(event: _RuleLine) -> Rule:
        values = [_number(token) for token in event.tokens]
        if len(values) != 3:
            raise ParseError(
                f"expected 3 numbers (destination source length), got {len(values)}",
                kind=ParseErrorKind.FIELD_COUNT,
                line=event.line,
            )
        destination, source, length = values
        if length < 0:
            raise ParseError(
                f"rule length {length} is negative",
                kind=ParseErrorKind.NEGATIVE_LENGTH,
                line=event.line,
            )
        if length > 0:
            for what, value in (
                ("source end", source + length - 1),
                ("destination end", destination + length - 1),
                ("shift", destination - source),
            ):
                if not in_range(value):
                    raise ParseError(
                        f"rule {destination} {source} {length}: {what} {value} "
                        "does not fit in a signed 64-bit integer",
                        kind=ParseErrorKind.OUT_OF_RANGE,
                        line=event.line,
                    )
        return Rule(destination, source, length, event.line)

    @classmethod
    def _stages(cls, events: Sequence[_Event]) -> Tuple[Tuple[Rule, ...], ...]:
        stages: List[List[Rule]] = []
        current = -1
        for event in events:
            if isinstance(event, _Header):
                expected = current + 1
                if expected >= len(STAGE_NAMES) or event.name != STAGE_NAMES[expected]:
                    wanted = STAGE_NAMES[expected] if expected < len(STAGE_NAMES) else "end of input"
                    raise StructuralError(
                        f"unexpected stage {event.name!r}, expected {wanted!r}",
                        code=ErrorCode.UNEXPECTED_STAGE,
                        line=event.line,
                    )
                current = expected
                stages.append([])
                continue
            if current < 0:
                raise StructuralError(
                    "rule line before the first stage header",
                    code=ErrorCode.RULE_OUTSIDE_STAGE,
                    line=event.line,
                )
            stages[current].append(cls._rule(event))
        return tuple(tuple(rules) for rules in stages)


# ═══════════════════════════════════════════════════════════════════════
#  Entry points
# ═══════════════════════════════════════════════════════════════════════

def parse_almanac(text: str) -> Almanac:
    """Parse almanac *text*; raises :class:`~almanac.errors.AlmanacError`."""
    try:
        tree = ALMANAC_GRAMMAR.parse(text)
    except GrammarParseError as exc:
        rest = text[exc.pos:].splitlines()
        snippet = rest[0] if rest else ""
        raise ParseError(
            f"cannot parse {snippet!r}" if snippet else "unexpected end of input",
            kind=ParseErrorKind.SYNTAX,
            line=exc.line(),
            column=exc.column(),
        ) from exc

    almanac = AlmanacBuilder(text).visit(tree)
    logger.debug(
        "parsed %d seeds and %d rules",
        len(almanac.seeds), sum(len(rules) for rules in almanac.stages),
    )
    return almanac


def load_almanac(path: Union[str, Path]) -> Almanac:
    """Read and parse the file at *path*."""
    text = Path(path).read_text(encoding="utf-8")
    logger.info("loaded %s (%d bytes)", path, len(text))
    return parse_almanac(text)
