"""CommandRunner tests that run real shell commands."""

import os
from unittest.mock import patch

import pytest

from solaris_installer.command_runner import CommandRunner, ProcessResult


def _runner(**kwargs):
    chunks = []
    runner = CommandRunner(output=chunks.append, decorated=True, **kwargs)
    return runner, chunks


@pytest.mark.integration
class TestRunSucceeds:

    def test_returns_zero_exit_code(self):
        runner, _ = _runner()
        result = runner.run(["true"])
        assert result == ProcessResult(exit_code=0, output="")
        assert result.successful

    def test_streams_each_line_to_output(self):
        runner, chunks = _runner()
        runner.run(["echo one", "echo two"])
        assert chunks == ["one\n", "two\n"]

    def test_collects_combined_output(self):
        runner, _ = _runner()
        result = runner.run(["echo out", "echo err 1>&2"])
        assert result.output == "out\nerr\n"

    def test_runs_in_working_directory(self, tmp_path):
        runner, _ = _runner()
        result = runner.run(["pwd"], cwd=str(tmp_path))
        assert result.output.strip() == str(tmp_path.resolve())

    def test_applies_environment_overrides(self):
        runner, _ = _runner()
        result = runner.run(["echo $SOLARIS_TEST_VALUE"], env={"SOLARIS_TEST_VALUE": "hello"})
        assert result.output == "hello\n"


@pytest.mark.integration
class TestRunStopsAtFirstFailure:

    def test_failing_command_stops_the_batch(self):
        runner, chunks = _runner()
        result = runner.run(["false", "echo hi"])
        assert result.exit_code != 0
        assert not result.successful
        assert "hi" not in result.output
        assert chunks == []

    def test_returns_exit_code_of_failing_command(self):
        runner, _ = _runner()
        result = runner.run(["echo before", "exit 3", "echo after"])
        assert result.exit_code == 3
        assert result.output == "before\n"


@pytest.mark.integration
class TestRunWithoutDecoration:

    def test_appends_no_ansi_flag_to_commands(self):
        chunks = []
        runner = CommandRunner(output=chunks.append, decorated=False)
        result = runner.run(["echo"])
        assert result.output == "--no-ansi\n"


@pytest.mark.integration
class TestTtyFallback:

    def test_unsupported_tty_warns_and_uses_pipes(self, capsys):
        runner, chunks = _runner(tty=True)
        with patch("solaris_installer.command_runner.tty_supported", return_value=False):
            result = runner.run(["echo piped"])
        assert result.exit_code == 0
        assert chunks == ["piped\n"]
        assert "WARN" in capsys.readouterr().err

    def test_spawn_failure_warns_and_uses_pipes(self, capsys):
        runner, chunks = _runner(tty=True)
        with patch("solaris_installer.command_runner.tty_supported", return_value=True), \
             patch("ptyprocess.PtyProcess.spawn", side_effect=OSError("no pty")):
            result = runner.run(["echo piped"])
        assert result.exit_code == 0
        assert chunks == ["piped\n"]
        assert "no pty" in capsys.readouterr().err


@pytest.mark.integration
@pytest.mark.skipif(os.name != "posix", reason="pseudo-terminals need a POSIX host")
class TestPtyStreaming:

    @pytest.fixture(autouse=True)
    def _tty_available(self):
        with patch("solaris_installer.command_runner.tty_supported", return_value=True):
            yield

    def test_failing_command_stops_the_batch(self):
        runner, chunks = _runner(tty=True)
        result = runner.run(["false", "echo hi"])
        assert result.exit_code != 0
        assert "hi" not in result.output
        assert chunks == []

    def test_streams_one_line_at_a_time(self):
        runner, chunks = _runner(tty=True)
        result = runner.run(["printf 'a\\nb\\nc\\n'"])
        assert result.exit_code == 0
        assert [chunk.rstrip("\r\n") for chunk in chunks] == ["a", "b", "c"]
        assert all(chunk.endswith("\n") for chunk in chunks)

    def test_indents_every_line_on_stdout(self, capsys):
        runner = CommandRunner(decorated=True, tty=True)
        result = runner.run(["printf 'a\\nb\\nc\\n'"])
        assert result.exit_code == 0
        out = capsys.readouterr().out
        assert [line for line in out.splitlines() if line] == ["    a", "    b", "    c"]

    def test_output_without_trailing_newline_is_flushed(self):
        runner, chunks = _runner(tty=True)
        runner.run(["printf done"])
        assert chunks == ["done"]


@pytest.mark.integration
class TestVerbose:

    def test_echoes_batch_before_running(self, capsys):
        runner, _ = _runner(verbose=True)
        runner.run(["true", "true"])
        assert "Running: true && true" in capsys.readouterr().err
