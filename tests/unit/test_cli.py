"""
Unit tests for releasy-emit and releasy-handler.
"""
import json
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from releasy.cli import emit, handler
from releasy.git import GitAutomation, GitIdentity

from tests.unit.conftest import FakeRunner


FIXTURE = str(Path(__file__).parent / "fixtures" / "repo-plan-sway-wallet-sdk.toml")


def ok_response():
    response = Mock()
    response.status_code = 204
    response.text = ""
    return response


class TestEmitCLI:
    """Test releasy-emit."""

    def test_dry_run_prints_targets_in_order(self, capsys):
        """Should print targets in neighbor order without sending."""
        emit.main(['--path', FIXTURE, '--event', 'new-commit-to-dependency', '--dry-run'])

        out = capsys.readouterr().out.splitlines()
        assert out == [
            "Would send new-commit-to-dependency to FuelLabs/forc-wallet",
            "Would send new-commit-to-dependency to FuelLabs/sway",
        ]

    @patch('requests.Session.post')
    def test_sends_event_with_current_repo_payload(self, mock_post, monkeypatch, capsys):
        """Should send the current repo as the event source."""
        monkeypatch.setenv("DISPATCH_TOKEN", "test-token")
        mock_post.return_value = ok_response()

        emit.main(['--path', FIXTURE, '--event', 'new-commit-to-dependency', '--commit-hash', 'abc'])

        assert mock_post.call_count == 2
        body = json.loads(mock_post.call_args_list[0][1]['data'])
        assert body['client_payload']['repo'] == {'name': 'fuels-rs', 'owner': 'FuelLabs'}
        assert body['client_payload']['details']['commit_hash'] == 'abc'
        assert "Sent new-commit-to-dependency to FuelLabs/sway" in capsys.readouterr().out

    def test_missing_token_exits(self, monkeypatch, capsys):
        """Should exit 1 when dependents exist but no token is set."""
        monkeypatch.delenv("DISPATCH_TOKEN", raising=False)

        with pytest.raises(SystemExit) as exc_info:
            emit.main(['--path', FIXTURE, '--event', 'new-release'])

        assert exc_info.value.code == 1
        assert "DISPATCH_TOKEN" in capsys.readouterr().err

    def test_leaf_repo_needs_no_token(self, tmp_path, monkeypatch, capsys):
        """Should succeed without DISPATCH_TOKEN when nothing depends on the current repo."""
        monkeypatch.delenv("DISPATCH_TOKEN", raising=False)
        path = tmp_path / "repo-plan.toml"
        path.write_text(Path(FIXTURE).read_text().replace(
            'name = "fuels-rs"\nowner = "FuelLabs"\n\n[repo.sway.details]',
            'name = "sway"\nowner = "FuelLabs"\n\n[repo.sway.details]',
            1,
        ))

        emit.main(['--path', str(path), '--event', 'new-release'])

        assert "No repos depend on FuelLabs/sway, nothing to send" in capsys.readouterr().out

    def test_missing_manifest_exits(self, tmp_path, capsys):
        """Should exit 1 when the manifest cannot be read."""
        with pytest.raises(SystemExit) as exc_info:
            emit.main(['--path', str(tmp_path / "nope.toml"), '--event', 'new-release', '--dry-run'])

        assert exc_info.value.code == 1
        assert "failed to read manifest file" in capsys.readouterr().err

    def test_unknown_event_type_exits(self, capsys):
        """Should exit 1 for an unknown event type."""
        with pytest.raises(SystemExit) as exc_info:
            emit.main(['--path', FIXTURE, '--event', 'new-commit', '--dry-run'])

        assert exc_info.value.code == 1
        assert "possible values" in capsys.readouterr().err

    def test_missing_dependency_definition_exits(self, tmp_path, capsys):
        """Should exit 1 naming the undefined dependency key."""
        path = tmp_path / "repo-plan.toml"
        path.write_text(
            '[current-repo]\nname = "sway"\nowner = "FuelLabs"\n\n'
            '[repo.sway.details]\nname = "sway"\nowner = "FuelLabs"\n\n'
            '[repo.sway]\ndependencies = ["rust-sdk"]\n'
        )

        with pytest.raises(SystemExit):
            emit.main(['--path', str(path), '--event', 'new-release', '--dry-run'])

        assert "(`rust-sdk`)" in capsys.readouterr().err

    def test_manifest_warnings_printed(self, tmp_path, capsys):
        """Should print manifest warnings to stderr."""
        path = tmp_path / "repo-plan.toml"
        path.write_text(
            'extra = 1\n[current-repo]\nname = "sway"\nowner = "FuelLabs"\n\n'
            '[repo.sway.details]\nname = "sway"\nowner = "FuelLabs"\n'
        )

        emit.main(['--path', str(path), '--event', 'new-release', '--dry-run'])

        assert "WARNING: unused manifest key: extra" in capsys.readouterr().err


class TestHandlerCLI:
    """Test releasy-handler."""

    def setup_method(self):
        self.runner = FakeRunner(remote_branches=["releasy/FuelLabs-fuels-rs-master"])
        self.git = GitAutomation(Path("/work"), GitIdentity("releasy", "releasy@fuel.sh"), runner=self.runner)

    def test_handles_flag_event(self, tmp_path, capsys):
        """Should handle an event given as flags."""
        path = tmp_path / "repo-plan.toml"
        path.write_text(Path(FIXTURE).read_text().replace(
            'name = "fuels-rs"\nowner = "FuelLabs"\n\n[repo.sway.details]',
            'name = "sway"\nowner = "FuelLabs"\n\n[repo.sway.details]',
            1,
        ))

        handler.main([
            '--path', str(path),
            '--event', 'new-commit-to-dependency',
            '--repo-name', 'fuels-rs',
            '--repo-owner', 'FuelLabs',
            '--commit-hash', 'abc',
        ], git=self.git)

        assert "Updated releasy/FuelLabs-fuels-rs-master" in capsys.readouterr().out

    def test_json_with_flags_exits(self, capsys):
        """Should exit 1 when --json is mixed with flags."""
        with pytest.raises(SystemExit) as exc_info:
            handler.main(['--path', FIXTURE, '--json', '{}', '--repo-name', 'sway'], git=self.git)

        assert exc_info.value.code == 1
        assert "--json should be used without" in capsys.readouterr().err

    def test_unrelated_event_exits(self, capsys):
        """The fixture's current repo is fuels-rs, which depends on nothing."""
        event_json = json.dumps({
            'event_type': 'new-commit-to-dependency',
            'client_payload': {'repo': {'name': 'sway', 'owner': 'FuelLabs'}},
        })

        with pytest.raises(SystemExit) as exc_info:
            handler.main(['--path', FIXTURE, '--json', event_json], git=self.git)

        assert exc_info.value.code == 1
        assert "does not depend on" in capsys.readouterr().err
