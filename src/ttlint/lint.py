"""Single-pass scan-and-rewrite engine.

The scanner walks the match stream once. Line and column numbers are carried
forward incrementally from the previous match instead of being recounted from
the start of the buffer, and the fixed output is assembled from the gaps
between matches in the same pass.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import TextIO

from ttlint.patterns import BOM, BOM_MESSAGE, CompiledPatterns, MatchReason, compile_patterns


logger = logging.getLogger(__name__)


@dataclass
class Position:
    """Scan cursor. Only ever moves forward."""

    offset: int = 0  # Byte offset of the last reported match
    line: int = 1  # 1-based
    col: int = 1  # 1-based, counted in bytes


@dataclass
class Diagnostic:
    """A single reported occurrence."""

    path: str
    line: int
    col: int
    reason: MatchReason
    message: str

    def format(self) -> str:
        return f'{self.path}:{self.line}:{self.col}: {self.message}'


@dataclass
class LintResult:
    """Outcome of scanning one buffer."""

    bad: bool
    fixed: bytes  # Bytes to persist; the input itself unless fix mode removed something
    diagnostics: list[Diagnostic] = field(default_factory=list)


def _advance(cursor: Position, contents: bytes, pos: int) -> Position:
    """Return the cursor moved to `pos`, counting only the bytes in between."""
    gap = contents[cursor.offset : pos]
    lines = gap.count(b'\n')
    # rfind is -1 without a newline, which yields the whole gap
    since_newline = len(gap) - gap.rfind(b'\n') - 1
    if lines == 0:
        col = cursor.col + since_newline
    else:
        col = since_newline + 1
    return Position(offset=pos, line=cursor.line + lines, col=col)


def _emit(sink: TextIO, diagnostic: Diagnostic, diagnostics: list[Diagnostic]):
    sink.write(diagnostic.format() + '\n')
    diagnostics.append(diagnostic)


def lint_patterns(
    path: str | os.PathLike,
    contents: bytes,
    user_patterns: list[str] | tuple[str, ...],
    sink: TextIO,
    fix: bool,
    compiled: CompiledPatterns | None = None,
) -> LintResult:
    """Report every pattern match in `contents` and optionally remove them.

    Args:
        path: Shown in front of every diagnostic line
        contents: Raw bytes to scan
        user_patterns: Literal patterns searched after the built-ins
        sink: Text stream receiving one `path:line:col: message` line per match
        fix: Build a rewritten buffer with every matched span removed
        compiled: Pre-compiled patterns, reused across files. Built from
            `user_patterns` when omitted.

    Returns:
        LintResult with the bad flag, the bytes to persist and the diagnostics.
    """
    if compiled is None:
        compiled = compile_patterns(user_patterns)
    display = str(path)

    diagnostics: list[Diagnostic] = []
    fixed = bytearray()
    last_end = 0
    cursor = Position()

    for pattern, start, end in compiled.find_iter(contents):
        pos = start + 1 if pattern.anchored else start

        cursor = _advance(cursor, contents, pos)
        _emit(
            sink,
            Diagnostic(display, cursor.line, cursor.col, pattern.reason, pattern.message),
            diagnostics,
        )

        if fix:
            # The anchoring newline sits before `pos` and is kept with the gap
            fixed += contents[last_end:pos]
            if pattern.restores_newline:
                fixed += b'\n'
            last_end = end

    if fix:
        fixed += contents[last_end:]
        output = bytes(fixed)
    else:
        output = contents

    if diagnostics:
        logger.debug(f'{display}: {len(diagnostics)} matches')
    return LintResult(bad=bool(diagnostics), fixed=output, diagnostics=diagnostics)


def lint_bytes(
    path: str | os.PathLike,
    contents: bytes,
    user_patterns: list[str] | tuple[str, ...],
    sink: TextIO,
    fix: bool,
    compiled: CompiledPatterns | None = None,
) -> LintResult:
    """Check for a byte-order mark, then run the pattern scan.

    A leading BOM is reported at 1:1. In fix mode it is stripped before the
    pattern scan, so later positions are relative to the stripped buffer.
    Without fix mode the scan runs over the original bytes, BOM included.

    Args:
        path: Shown in front of every diagnostic line
        contents: Raw bytes to scan
        user_patterns: Literal patterns searched after the built-ins
        sink: Text stream receiving diagnostic lines
        fix: Remove the BOM and every matched span
        compiled: Pre-compiled patterns, see `lint_patterns`

    Returns:
        LintResult covering the BOM and every pattern match.
    """
    diagnostics: list[Diagnostic] = []
    has_bom = contents.startswith(BOM)
    if has_bom:
        _emit(sink, Diagnostic(str(path), 1, 1, MatchReason.BYTE_ORDER_MARK, BOM_MESSAGE), diagnostics)
        if fix:
            contents = contents[len(BOM) :]

    result = lint_patterns(path, contents, user_patterns, sink, fix, compiled=compiled)
    diagnostics.extend(result.diagnostics)
    return LintResult(bad=has_bom or result.bad, fixed=result.fixed, diagnostics=diagnostics)
