"""Tests for the ttlint command line."""

import json
import os
import shutil
import tempfile

from click.testing import CliRunner

from ttlint.__version__ import __version__
from ttlint.cli.main import cli


def parse_json(output: str) -> dict:
    """Extract the JSON report; diagnostic lines printed on stderr come first."""
    return json.loads(output[output.index('{') :])


class TestCLI:
    """Test ttlint exit codes and output."""

    def setup_method(self):
        self.runner = CliRunner()
        self.temp_dir = tempfile.mkdtemp()

        self.clean_file = os.path.join(self.temp_dir, 'clean.txt')
        with open(self.clean_file, 'wb') as f:
            f.write(b'all good here\n')

        self.bad_file = os.path.join(self.temp_dir, 'bad.txt')
        with open(self.bad_file, 'wb') as f:
            f.write(b'line with trailing space \nhello FIXME world\n')

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def read(self, path: str) -> bytes:
        with open(path, 'rb') as f:
            return f.read()

    def test_clean_file(self):
        result = self.runner.invoke(cli, [self.clean_file])
        assert result.exit_code == 0
        assert result.output == ''

    def test_bad_file(self):
        result = self.runner.invoke(cli, [self.bad_file])
        assert result.exit_code == 1
        assert f'{self.bad_file}:1:25: trailing whitespace' in result.output
        assert 'FIXME' not in result.output

    def test_user_patterns(self):
        result = self.runner.invoke(cli, ['-p', 'FIXME', '--pattern', 'world', self.bad_file])
        assert result.exit_code == 1
        assert f'{self.bad_file}:2:7: FIXME' in result.output
        assert f'{self.bad_file}:2:13: world' in result.output

    def test_user_pattern_on_clean_file(self):
        result = self.runner.invoke(cli, ['-p', 'good', self.clean_file])
        assert result.exit_code == 1
        assert f'{self.clean_file}:1:5: good' in result.output

    def test_fix(self):
        result = self.runner.invoke(cli, ['--fix', '-p', 'FIXME', self.bad_file])
        assert result.exit_code == 1
        assert self.read(self.bad_file) == b'line with trailing space\nhello  world\n'

        result = self.runner.invoke(cli, ['-f', '-p', 'FIXME', self.bad_file])
        assert result.exit_code == 0

    def test_without_fix_file_unchanged(self):
        before = self.read(self.bad_file)
        self.runner.invoke(cli, [self.bad_file])
        assert self.read(self.bad_file) == before

    def test_any_bad_file_fails_run(self):
        result = self.runner.invoke(cli, [self.clean_file, self.bad_file])
        assert result.exit_code == 1

    def test_no_files(self):
        result = self.runner.invoke(cli, [])
        assert result.exit_code == 0

    def test_missing_file(self):
        missing = os.path.join(self.temp_dir, 'missing.txt')
        result = self.runner.invoke(cli, [self.clean_file, missing])
        assert result.exit_code == 2
        assert f'Error: Failed to open file: {missing}' in result.output

    def test_empty_pattern(self):
        result = self.runner.invoke(cli, ['-p', '', self.clean_file])
        assert result.exit_code == 2
        assert 'Error: Patterns must not be empty' in result.output

    def test_output_failure(self, monkeypatch):
        def broken_pipe(*args, **kwargs):
            raise BrokenPipeError(32, 'Broken pipe')

        monkeypatch.setattr('ttlint.linter.lint_bytes', broken_pipe)
        result = self.runner.invoke(cli, [self.bad_file])
        assert result.exit_code == 2
        assert 'Error: [Errno 32] Broken pipe' in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_json_report(self):
        result = self.runner.invoke(cli, ['--json', '-p', 'FIXME', self.clean_file, self.bad_file])
        assert result.exit_code == 1

        data = parse_json(result.output)
        assert data['version'] == __version__
        assert data['patterns'] == ['FIXME']
        assert data['bad'] is True
        assert data['fix'] is False
        assert [f['path'] for f in data['files']] == [self.clean_file, self.bad_file]
        assert data['files'][0]['diagnostics'] == []
        assert data['files'][1]['diagnostics'] == [
            {'line': 1, 'col': 25, 'reason': 'trailing_space', 'message': 'trailing whitespace'},
            {'line': 2, 'col': 7, 'reason': 'user_pattern', 'message': 'FIXME'},
        ]

    def test_json_report_with_fix(self):
        result = self.runner.invoke(cli, ['--json', '--fix', self.bad_file])
        data = parse_json(result.output)
        assert data['fix'] is True
        assert data['files'][0]['fixed'] is True

    def test_parallel_workers(self):
        paths = []
        for i in range(6):
            path = os.path.join(self.temp_dir, f'p{i}.txt')
            with open(path, 'wb') as f:
                f.write(b'x\r\n')
            paths.append(path)

        result = self.runner.invoke(cli, ['-j', '3', *paths])
        assert result.exit_code == 1
        for path in paths:
            assert f'{path}:1:2: carriage return' in result.output

    def test_invalid_workers(self):
        result = self.runner.invoke(cli, ['--max-workers', '0', self.clean_file])
        assert result.exit_code == 2

    def test_env_patterns(self, monkeypatch):
        monkeypatch.setenv('TTLINT_PATTERNS', 'FIXME,,world')
        result = self.runner.invoke(cli, [self.bad_file])
        assert result.exit_code == 1
        assert f'{self.bad_file}:2:7: FIXME' in result.output
        assert f'{self.bad_file}:2:13: world' in result.output

    def test_env_max_workers(self, monkeypatch):
        monkeypatch.setenv('TTLINT_MAX_WORKERS', '4')
        result = self.runner.invoke(cli, [self.clean_file, self.bad_file])
        assert result.exit_code == 1

    def test_version(self):
        result = self.runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert __version__ in result.output
