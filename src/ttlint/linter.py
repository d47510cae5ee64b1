"""File-level driver around the scan-and-rewrite engine.

Reads each file whole, lints it, and writes the fixed bytes back when fix
mode changed anything. Any I/O error aborts the run with the path attached.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from time import time
from typing import TextIO

from ttlint.errors import FileAccessError
from ttlint.lint import LintResult, lint_bytes
from ttlint.models import DiagnosticModel, FileReport
from ttlint.patterns import CompiledPatterns, compile_patterns


logger = logging.getLogger(__name__)


class LockedSink:
    """Serializes writes to a shared stream so lines from parallel files never interleave.

    The engine writes one complete diagnostic line per `write` call.
    """

    def __init__(self, stream: TextIO):
        self.stream = stream
        self._lock = threading.Lock()

    def write(self, text: str) -> int:
        with self._lock:
            return self.stream.write(text)

    def flush(self):
        with self._lock:
            self.stream.flush()


def _read_file(path: str) -> bytes:
    try:
        f = open(path, 'rb')
    except OSError as e:
        raise FileAccessError(path, 'open', e) from e
    with f:
        try:
            return f.read()
        except OSError as e:
            raise FileAccessError(path, 'read', e) from e


def _write_file(path: str, data: bytes):
    try:
        f = open(path, 'wb')
    except OSError as e:
        raise FileAccessError(path, 'open for writing', e) from e
    with f:
        try:
            f.write(data)
        except OSError as e:
            raise FileAccessError(path, 'write', e) from e


def _to_report(path: str, size: int, result: LintResult, rewritten: bool) -> FileReport:
    return FileReport(
        path=path,
        bad=result.bad,
        fixed=rewritten,
        size_bytes=size,
        diagnostics=[
            DiagnosticModel(line=d.line, col=d.col, reason=d.reason.value, message=d.message)
            for d in result.diagnostics
        ],
    )


def lint_file(
    path: str,
    user_patterns: list[str] | tuple[str, ...],
    fix: bool,
    sink: TextIO,
    compiled: CompiledPatterns | None = None,
) -> FileReport:
    """Lint one file, rewriting it in place when fix mode removed anything.

    Args:
        path: File to lint
        user_patterns: Literal patterns searched after the built-ins
        fix: Remove matches and persist the result
        sink: Stream receiving diagnostic lines
        compiled: Pre-compiled patterns shared between files

    Returns:
        FileReport for the file.

    Raises:
        FileAccessError: If the file cannot be opened, read or written.
    """
    contents = _read_file(path)
    logger.debug(f'Linting {path} ({len(contents):,} bytes)')

    result = lint_bytes(path, contents, user_patterns, sink, fix, compiled=compiled)

    rewritten = False
    if result.fixed != contents:
        # Without fix mode the engine hands back the input object itself
        assert fix, 'output differs from input without fix mode'
        _write_file(path, result.fixed)
        rewritten = True
        logger.debug(f'Rewrote {path}: {len(contents) - len(result.fixed):,} bytes removed')

    return _to_report(path, len(contents), result, rewritten)


class LintRunResult:
    """Result of linting one or more files."""

    def __init__(self):
        self.reports: list[FileReport] = []
        self.total_time: float = 0.0

    @property
    def bad(self) -> bool:
        return any(r.bad for r in self.reports)

    @property
    def count(self) -> int:
        return sum(len(r.diagnostics) for r in self.reports)


class Linter:
    """Lints a batch of files with one shared pattern set.

    Files are independent, so with max_workers > 1 they are linted in a
    thread pool. The sink is then wrapped in a LockedSink.
    """

    def __init__(self, patterns: list[str] | tuple[str, ...] = (), fix: bool = False, max_workers: int = 1):
        """Initialize the linter.

        Args:
            patterns: User literal patterns
            fix: Remove matches and rewrite files
            max_workers: Files linted in parallel

        Raises:
            PatternError: If the pattern set cannot be compiled.
        """
        self.patterns = list(patterns)
        self.fix = fix
        self.max_workers = max(1, max_workers)
        self.compiled = compile_patterns(self.patterns)

    def lint_file(self, path: str, sink: TextIO) -> FileReport:
        return lint_file(path, self.patterns, self.fix, sink, compiled=self.compiled)

    def lint_paths(self, paths: list[str], sink: TextIO) -> LintRunResult:
        """Lint every file in order.

        Args:
            paths: Files to lint
            sink: Stream receiving diagnostic lines

        Returns:
            LintRunResult with one report per file, in the order given.

        Raises:
            FileAccessError: On the first file that cannot be read or written.
            OSError: If writing to the sink fails. Files not yet started are skipped.
        """
        result = LintRunResult()
        start_time = time()

        if self.max_workers == 1 or len(paths) <= 1:
            for path in paths:
                result.reports.append(self.lint_file(path, sink))
        else:
            locked = LockedSink(sink)
            logger.debug(f'Linting {len(paths)} files with {self.max_workers} workers')
            reports: list[FileReport | None] = [None] * len(paths)
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                future_to_index = {
                    executor.submit(self.lint_file, path, locked): i for i, path in enumerate(paths)
                }
                try:
                    for future in as_completed(future_to_index):
                        reports[future_to_index[future]] = future.result()
                except BaseException:
                    # Files not yet started must not be read or rewritten
                    executor.shutdown(wait=True, cancel_futures=True)
                    raise
            result.reports = reports

        result.total_time = time() - start_time
        logger.debug(
            f'Completed: {len(result.reports)} files, {result.count} diagnostics '
            f'in {result.total_time:.2f}s'
        )
        return result
