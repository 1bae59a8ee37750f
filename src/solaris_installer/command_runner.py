"""Run a batch of shell commands as one `a && b && c` invocation, streaming output."""

import codecs
import os
import shlex
import subprocess
import sys
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import click

NO_ANSI_FLAG = "--no-ansi"
PASS_THROUGH_PREFIXES = ("chmod", "rm", "git")
OUTPUT_INDENT = "    "


@dataclass
class ProcessResult:
    """Exit code and combined stdout/stderr of one command batch."""
    exit_code: int
    output: str = ""

    @property
    def successful(self):
        return self.exit_code == 0


def quote_for_shell(argument):
    """Quote one argument for the platform shell."""
    if sys.platform == "win32":
        return subprocess.list2cmdline([argument])
    return shlex.quote(argument)


def output_is_decorated(stream=None):
    """Whether the stream is a terminal that should receive colored output."""
    stream = stream or sys.stdout
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def tty_supported():
    """Whether this host can attach a pseudo-terminal to child processes."""
    return os.name == "posix" and sys.stdout.isatty() and os.access("/dev/tty", os.W_OK)


def _is_pass_through(command, php_binary):
    prefixes = PASS_THROUGH_PREFIXES
    if php_binary:
        prefixes = prefixes + (f"{php_binary} ./vendor/bin/pest",)
    return command.startswith(prefixes)


def prepare_commands(commands, decorated, php_binary=None):
    """Append --no-ansi to each command when output is not decorated.

    chmod, rm, git and the pest test runner do not accept the flag and are
    returned unchanged.
    """
    if decorated:
        return list(commands)
    prepared = []
    for command in commands:
        if _is_pass_through(command, php_binary) or command.endswith(f" {NO_ANSI_FLAG}"):
            prepared.append(command)
        else:
            prepared.append(f"{command} {NO_ANSI_FLAG}")
    return prepared


def join_commands(commands):
    return " && ".join(commands)


def _echo_output(text):
    click.echo(OUTPUT_INDENT + text, nl=False)


def _warn(message):
    click.echo(click.style(" WARN ", bg="yellow", fg="black") + " " + message + "\n", err=True)


class CommandRunner:
    """Runs command batches in a shell, optionally attached to a pseudo-terminal.

    Args:
        output: Callable receiving each line of child output as it arrives.
        decorated: Whether the caller's output supports color codes.
        tty: Whether to request a pseudo-terminal for the child.
        php_binary: PHP invocation, used to recognise the pest test runner.
        verbose: Echo each batch before running it.
    """

    def __init__(
        self,
        output: Optional[Callable[[str], None]] = None,
        decorated: Optional[bool] = None,
        tty: bool = False,
        php_binary: Optional[str] = None,
        verbose: bool = False,
    ):
        self._output = output or _echo_output
        self.decorated = output_is_decorated() if decorated is None else decorated
        self.tty = tty
        self.php_binary = php_binary
        self.verbose = verbose

    def run(
        self,
        commands: List[str],
        cwd: Optional[str] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> ProcessResult:
        """Run commands, stopping at the first failure, and return the batch result."""
        command_line = join_commands(prepare_commands(commands, self.decorated, self.php_binary))
        child_env = dict(os.environ)
        if env:
            child_env.update(env)

        if self.verbose:
            click.echo(f"Running: {command_line}", err=True)

        process = self._spawn_pty(command_line, cwd, child_env) if self.tty else None
        if process is not None:
            return self._stream_pty(process)
        return self._run_with_pipes(command_line, cwd, child_env)

    def _spawn_pty(self, command_line, cwd, env):
        """Start the batch on a pseudo-terminal, or return None with a warning."""
        if not tty_supported():
            _warn("TTY mode requested, but it is not supported on this host.")
            return None
        import ptyprocess

        try:
            return ptyprocess.PtyProcess.spawn(
                ["/bin/sh", "-c", command_line], cwd=cwd, env=env, echo=False,
            )
        except OSError as e:
            _warn(f"Unable to attach a TTY: {e}")
            return None

    def _run_with_pipes(self, command_line, cwd, env) -> ProcessResult:
        process = subprocess.Popen(
            command_line,
            shell=True,
            cwd=cwd,
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
        )
        lines = []
        for line in process.stdout:
            lines.append(line)
            self._output(line)
        process.stdout.close()
        return ProcessResult(exit_code=process.wait(), output="".join(lines))

    def _stream_pty(self, process) -> ProcessResult:
        """Read the PTY until EOF, passing complete lines to the output sink."""
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        chunks = []
        pending = ""
        while True:
            try:
                data = process.read(1024)
            except EOFError:
                break
            text = decoder.decode(data)
            chunks.append(text)
            pending += text
            while "\n" in pending:
                line, pending = pending.split("\n", 1)
                self._output(line + "\n")
        tail = decoder.decode(b"", final=True)
        chunks.append(tail)
        pending += tail
        if pending:
            self._output(pending)
        process.wait()
        if process.exitstatus is not None:
            exit_code = process.exitstatus
        else:
            exit_code = 128 + (process.signalstatus or 0)
        process.close()
        return ProcessResult(exit_code=exit_code, output="".join(chunks))
