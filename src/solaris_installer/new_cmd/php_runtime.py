"""Locate PHP and Composer and inspect which PHP extensions are loaded."""

import os
import shutil
import subprocess

from solaris_installer.command_runner import quote_for_shell
from solaris_installer.new_cmd.errors import MissingRuntimeExtension, PhpUnavailable

REQUIRED_EXTENSIONS = (
    "ctype",
    "filter",
    "hash",
    "mbstring",
    "openssl",
    "session",
    "tokenizer",
)


class PhpRuntime:
    """The PHP interpreter the installer shells out to."""

    def __init__(self, which=shutil.which, run=subprocess.run):
        self._which = which
        self._run = run
        self._modules = None

    def php_binary(self):
        """Shell-ready PHP invocation, falling back to a bare `php`."""
        found = self._which("php")
        if not found:
            return "php"
        return quote_for_shell(found)

    def find_composer(self, working_path=None):
        """Composer invocation: a local composer.phar run through PHP, else `composer`."""
        if working_path and os.path.isfile(os.path.join(working_path, "composer.phar")):
            return f"{self.php_binary()} composer.phar"
        return "composer"

    def loaded_extensions(self):
        """Lower-cased names reported by `php -m`; empty when PHP cannot be run."""
        extensions, _ = self._list_modules()
        return list(extensions)

    def _list_modules(self):
        """Return (extensions, failure reason); the reason is None when PHP ran."""
        if self._modules is None:
            self._modules = self._query_modules()
        return self._modules

    def _query_modules(self):
        php = self._which("php")
        if not php:
            return [], "php was not found on PATH"
        try:
            result = self._run([php, "-m"], capture_output=True, text=True)
        except OSError as e:
            return [], str(e)
        if result.returncode != 0:
            return [], f"`php -m` exited with status {result.returncode}"
        extensions = [
            line.strip().lower()
            for line in result.stdout.splitlines()
            if line.strip() and not line.startswith("[")
        ]
        return extensions, None

    def ensure_extensions_are_available(self, required=REQUIRED_EXTENSIONS):
        """Raise MissingRuntimeExtension listing every required extension not loaded.

        Raises PhpUnavailable instead when PHP itself cannot be run.
        """
        extensions, failure = self._list_modules()
        if failure is not None:
            raise PhpUnavailable(failure)
        loaded = set(extensions)
        missing = [ext for ext in required if ext not in loaded]
        if missing:
            raise MissingRuntimeExtension(missing)
