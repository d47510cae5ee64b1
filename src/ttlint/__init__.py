"""ttlint - tiny text linter.

Finds byte-order marks, merge conflict markers, trailing whitespace, carriage
returns and user literals in one pass, and can remove them.
"""

from .__version__ import __version__
from .errors import FileAccessError, PatternError, TtlintError
from .lint import Diagnostic, LintResult, Position, lint_bytes, lint_patterns
from .linter import Linter, LintRunResult, LockedSink, lint_file
from .patterns import BOM, BUILTIN_PATTERNS, CompiledPatterns, MatchReason, Pattern, compile_patterns


__all__ = [
    '__version__',
    # Errors
    'FileAccessError',
    'PatternError',
    'TtlintError',
    # Pattern compiler
    'BOM',
    'BUILTIN_PATTERNS',
    'CompiledPatterns',
    'MatchReason',
    'Pattern',
    'compile_patterns',
    # Engine
    'Diagnostic',
    'LintResult',
    'Position',
    'lint_bytes',
    'lint_patterns',
    # File driver
    'LintRunResult',
    'Linter',
    'LockedSink',
    'lint_file',
]
