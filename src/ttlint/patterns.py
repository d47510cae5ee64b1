"""Pattern compiler.

Builds one searchable structure out of the built-in defect patterns and any
user supplied literals. Matches come out leftmost-first and non-overlapping,
so the scanner never has to arbitrate between candidates itself.
"""

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from ttlint.errors import PatternError


logger = logging.getLogger(__name__)


class MatchReason(Enum):
    """Why a span of bytes was flagged."""

    BYTE_ORDER_MARK = 'byte_order_mark'
    CONFLICT_START = 'conflict_start'
    CONFLICT_SEPARATOR = 'conflict_separator'
    CONFLICT_END = 'conflict_end'
    TRAILING_SPACE = 'trailing_space'
    TRAILING_TAB = 'trailing_tab'
    CARRIAGE_RETURN = 'carriage_return'
    USER_PATTERN = 'user_pattern'

    @property
    def is_builtin(self) -> bool:
        return self is not MatchReason.USER_PATTERN


BOM = b'\xef\xbb\xbf'
BOM_MESSAGE = 'UTF-8 byte-order mark'

# Order matters: at a given offset the earliest entry wins.
BUILTIN_PATTERNS: list[tuple[MatchReason, bytes, str]] = [
    (MatchReason.CONFLICT_START, b'\n<<<<<<<', 'merge conflict start marker'),
    (MatchReason.CONFLICT_SEPARATOR, b'\n=======', 'merge conflict separator'),
    (MatchReason.CONFLICT_END, b'\n>>>>>>>', 'merge conflict end marker'),
    (MatchReason.TRAILING_SPACE, b' \n', 'trailing whitespace'),
    (MatchReason.TRAILING_TAB, b'\t\n', 'trailing whitespace'),
    (MatchReason.CARRIAGE_RETURN, b'\r', 'carriage return'),
]


@dataclass(frozen=True)
class Pattern:
    """One entry of the combined pattern list."""

    index: int  # Position in the combined list (built-ins first)
    reason: MatchReason
    needle: bytes
    message: str  # Text printed after "path:line:col: "

    @property
    def anchored(self) -> bool:
        """Pattern may only match at a line start (needle begins with a newline)."""
        return self.needle.startswith(b'\n')

    @property
    def restores_newline(self) -> bool:
        """A fix must put back the newline the match consumed."""
        return self.needle.endswith(b'\n')


class CompiledPatterns:
    """Combined pattern list plus the automaton that searches for all of them.

    The automaton is a single bytes regex made of one capturing group per
    escaped needle. Alternation is tried left to right at every offset, which
    gives leftmost-first semantics with built-ins taking precedence.
    """

    def __init__(self, patterns: list[Pattern]):
        self.patterns = patterns
        alternation = b'|'.join(b'(' + re.escape(p.needle) + b')' for p in patterns)
        try:
            self._regex = re.compile(alternation)
        except (re.error, OverflowError, RecursionError) as e:
            raise PatternError(f'Failed to build pattern automaton: {e}') from e

    @property
    def user_patterns(self) -> list[Pattern]:
        return [p for p in self.patterns if not p.reason.is_builtin]

    def find_iter(self, data: bytes) -> Iterator[tuple[Pattern, int, int]]:
        """Yield (pattern, start, end) for every non-overlapping match, left to right."""
        for match in self._regex.finditer(data):
            # Groups are numbered from 1 in pattern order
            yield self.patterns[match.lastindex - 1], match.start(), match.end()


def _to_bytes(pattern: str | bytes) -> bytes:
    if isinstance(pattern, bytes):
        return pattern
    return pattern.encode('utf-8')


def _to_message(pattern: str | bytes) -> str:
    if isinstance(pattern, bytes):
        return pattern.decode('utf-8', errors='replace')
    return pattern


def compile_patterns(user_patterns: Iterable[str | bytes] = ()) -> CompiledPatterns:
    """Compile the built-in patterns followed by the user literals.

    Args:
        user_patterns: Literal strings or bytes, in the order they should be
            reported. Duplicates are allowed.

    Returns:
        CompiledPatterns ready for scanning.

    Raises:
        PatternError: If a pattern is empty or the automaton cannot be built.
    """
    patterns = [
        Pattern(index=i, reason=reason, needle=needle, message=message)
        for i, (reason, needle, message) in enumerate(BUILTIN_PATTERNS)
    ]
    for user_pattern in user_patterns:
        needle = _to_bytes(user_pattern)
        if not needle:
            raise PatternError('Patterns must not be empty')
        patterns.append(
            Pattern(
                index=len(patterns),
                reason=MatchReason.USER_PATTERN,
                needle=needle,
                message=_to_message(user_pattern),
            )
        )

    compiled = CompiledPatterns(patterns)
    logger.debug(f'Compiled {len(patterns)} patterns ({len(patterns) - len(BUILTIN_PATTERNS)} user)')
    return compiled
