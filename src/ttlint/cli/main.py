"""Main CLI entry point"""

import sys

import click

from ttlint.__version__ import __version__
from ttlint.errors import TtlintError
from ttlint.linter import Linter
from ttlint.models import LintReport
from ttlint.utils import get_env_patterns, get_max_workers, setup_logging


EXIT_CLEAN = 0
EXIT_BAD = 1
EXIT_ERROR = 2


@click.command('ttlint')
@click.argument('files', nargs=-1, type=click.Path(dir_okay=False))
@click.option(
    '--pattern',
    '-p',
    'patterns',
    multiple=True,
    help='Additional literal pattern to search for (can be specified multiple times)',
)
@click.option('--fix', '-f', is_flag=True, help='Fix issues by removing matches')
@click.option('--json', 'json_output', is_flag=True, help='Print a JSON report to stdout')
@click.option(
    '--max-workers',
    '-j',
    type=click.IntRange(min=1),
    default=None,
    help='Files linted in parallel (default: TTLINT_MAX_WORKERS or 1)',
)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.version_option(version=__version__, prog_name='ttlint')
def cli(
    files: tuple[str, ...],
    patterns: tuple[str, ...],
    fix: bool,
    json_output: bool,
    max_workers: int | None,
    verbose: bool,
):
    """
    ttlint - tiny text linter.

    Reports byte-order marks, merge conflict markers, trailing whitespace,
    carriage returns and any extra literal patterns as path:line:col lines
    on stderr.

    \b
    Examples:
      ttlint README.md src/*.py
      ttlint -p FIXME -p TODO notes.txt
      ttlint --fix *.txt
      ttlint --json -j 4 docs/*.md

    \b
    Environment:
      TTLINT_PATTERNS      Comma separated extra patterns
      TTLINT_MAX_WORKERS   Default for --max-workers
      TTLINT_LOG_LEVEL     Log level (default WARNING)

    \b
    Exit status:
      0  no issues found
      1  at least one issue found
      2  error (unreadable file, invalid pattern, failed output)
    """
    setup_logging(verbose)

    all_patterns = list(patterns) + get_env_patterns()
    workers = max_workers if max_workers is not None else get_max_workers()
    stderr = sys.stderr

    try:
        linter = Linter(all_patterns, fix=fix, max_workers=workers)
        result = linter.lint_paths(list(files), stderr)
    except (TtlintError, OSError) as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(EXIT_ERROR)

    if json_output:
        report = LintReport(
            version=__version__,
            patterns=all_patterns,
            fix=fix,
            bad=result.bad,
            time=result.total_time,
            files=result.reports,
        )
        click.echo(report.model_dump_json(indent=2))

    sys.exit(EXIT_BAD if result.bad else EXIT_CLEAN)


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
