"""
Unit tests for the subprocess command runner.
"""
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from releasy.commands import CommandResult, SubprocessRunner, UnsafeCommandError


class TestSubprocessRunner:
    """Test command execution without spawning real processes."""

    def test_rejects_programs_outside_allow_list(self):
        """Should refuse to run programs that are not allowed."""
        runner = SubprocessRunner()

        with pytest.raises(UnsafeCommandError):
            runner.run('rm', ['-rf', '/'])

    @patch('releasy.commands.subprocess.run')
    def test_runs_program_with_args(self, mock_run):
        """Should pass the program and args to subprocess.run."""
        mock_run.return_value = subprocess.CompletedProcess(
            args=['git', 'status'], returncode=0, stdout="clean\n", stderr=""
        )
        runner = SubprocessRunner()

        result = runner.run('git', ['status'], cwd=Path('/tmp/repo'))

        assert result == CommandResult(returncode=0, stdout="clean\n", stderr="")
        assert result.ok
        call_args = mock_run.call_args
        assert call_args[0][0] == ['git', 'status']
        assert call_args[1]['cwd'] == Path('/tmp/repo')
        assert call_args[1]['check'] is False

    @patch('releasy.commands.subprocess.run')
    def test_non_zero_exit_is_returned_not_raised(self, mock_run):
        """Should return a failed result instead of raising."""
        mock_run.return_value = subprocess.CompletedProcess(
            args=['git', 'push'], returncode=128, stdout="", stderr="denied"
        )

        result = SubprocessRunner().run('git', ['push'])

        assert not result.ok
        assert result.returncode == 128
        assert result.stderr == "denied"
