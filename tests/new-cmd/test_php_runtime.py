"""Tests for php_runtime: executable lookup and extension checks."""

import subprocess
from unittest.mock import MagicMock

import pytest

from solaris_installer.new_cmd.errors import MissingRuntimeExtension, PhpUnavailable
from solaris_installer.new_cmd.php_runtime import REQUIRED_EXTENSIONS, PhpRuntime

PHP_MODULES = """[PHP Modules]
Core
ctype
filter
hash
mbstring
openssl
PDO
pdo_sqlite
session
tokenizer

[Zend Modules]

"""


def _runtime(stdout=PHP_MODULES, returncode=0, which="/usr/bin/php"):
    run = MagicMock(return_value=subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout))
    return PhpRuntime(which=lambda _: which, run=run), run


@pytest.mark.unit
class TestPhpBinary:

    def test_uses_found_executable(self):
        runtime, _ = _runtime()
        assert runtime.php_binary() == "/usr/bin/php"

    def test_quotes_paths_with_spaces(self):
        runtime, _ = _runtime(which="/opt/my php/bin/php")
        assert runtime.php_binary() == "'/opt/my php/bin/php'"

    def test_falls_back_to_php(self):
        runtime, _ = _runtime(which=None)
        assert runtime.php_binary() == "php"


@pytest.mark.unit
class TestFindComposer:

    def test_defaults_to_composer(self, tmp_path):
        runtime, _ = _runtime()
        assert runtime.find_composer(str(tmp_path)) == "composer"

    def test_uses_local_phar_through_php(self, tmp_path):
        (tmp_path / "composer.phar").write_text("")
        runtime, _ = _runtime()
        assert runtime.find_composer(str(tmp_path)) == "/usr/bin/php composer.phar"


@pytest.mark.unit
class TestLoadedExtensions:

    def test_parses_module_list(self):
        runtime, _ = _runtime()
        extensions = runtime.loaded_extensions()
        assert "pdo_sqlite" in extensions
        assert "core" in extensions
        assert not any(ext.startswith("[") for ext in extensions)

    def test_runs_php_once(self):
        runtime, run = _runtime()
        runtime.loaded_extensions()
        runtime.loaded_extensions()
        run.assert_called_once()
        assert run.call_args[0][0] == ["/usr/bin/php", "-m"]

    def test_failed_php_reports_nothing_loaded(self):
        runtime, _ = _runtime(returncode=1)
        assert runtime.loaded_extensions() == []

    def test_missing_php_reports_nothing_loaded(self):
        runtime = PhpRuntime(which=lambda _: None, run=MagicMock(side_effect=FileNotFoundError))
        assert runtime.loaded_extensions() == []


@pytest.mark.unit
class TestEnsureExtensionsAreAvailable:

    def test_passes_when_all_loaded(self):
        runtime, _ = _runtime()
        runtime.ensure_extensions_are_available()

    def test_reports_every_missing_extension(self):
        runtime, _ = _runtime(stdout="ctype\nfilter\nhash\nsession\n")
        with pytest.raises(MissingRuntimeExtension) as exc_info:
            runtime.ensure_extensions_are_available()
        assert exc_info.value.missing == ["mbstring", "openssl", "tokenizer"]
        assert str(exc_info.value) == (
            "The following PHP extensions are required but are not installed: "
            "mbstring, openssl, and tokenizer"
        )

    def test_single_missing_extension_message(self):
        runtime, _ = _runtime(stdout="\n".join(ext for ext in REQUIRED_EXTENSIONS if ext != "openssl"))
        with pytest.raises(MissingRuntimeExtension, match="installed: openssl$"):
            runtime.ensure_extensions_are_available()


@pytest.mark.unit
class TestPhpUnavailable:

    def test_missing_php_is_reported_instead_of_extensions(self):
        run = MagicMock()
        runtime = PhpRuntime(which=lambda _: None, run=run)
        with pytest.raises(PhpUnavailable, match="php was not found on PATH"):
            runtime.ensure_extensions_are_available()
        run.assert_not_called()

    def test_failing_php_reports_exit_status(self):
        runtime, _ = _runtime(returncode=255)
        with pytest.raises(PhpUnavailable, match="exited with status 255"):
            runtime.ensure_extensions_are_available()

    def test_unrunnable_php_reports_os_error(self):
        runtime = PhpRuntime(which=lambda _: "/usr/bin/php", run=MagicMock(side_effect=PermissionError("denied")))
        with pytest.raises(PhpUnavailable, match="denied"):
            runtime.ensure_extensions_are_available()
