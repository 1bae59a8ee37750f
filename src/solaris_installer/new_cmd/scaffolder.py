"""Scaffolder: the end-to-end `solaris new` sequence.

Input is collected and checked before anything is executed; after that each
command batch must succeed for the next stage to start. Nothing is rolled
back when a later stage fails.
"""

import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

import click

from solaris_installer.command_runner import ProcessResult, quote_for_shell
from solaris_installer.new_cmd.directory_guard import (
    ensure_target_available,
    installation_directory,
)
from solaris_installer.new_cmd.env_config import (
    configure_app_url,
    configure_database_connection,
    configure_redis,
)
from solaris_installer.new_cmd.errors import InstallerError
from solaris_installer.new_cmd.options import (
    PACKAGE_LABELS,
    Backend,
    Package,
    package_chain,
)
from solaris_installer.new_cmd.project_files import append_gitignore, write_auth_json
from solaris_installer.new_cmd.prompts import resolve_missing
from solaris_installer.new_cmd.validator import validate_request
from solaris_installer.templates.template_renderer import render_template


class ScaffoldStage(Enum):
    COLLECTING_INPUT = "collecting_input"
    VALIDATING = "validating"
    GUARDING_TARGET = "guarding_target"
    CREATING_BASE = "creating_base"
    INSTALLING_EXTRAS = "installing_extras"
    PATCHING_CONFIG = "patching_config"
    RUNNING_FOLLOW_UPS = "running_follow_ups"
    DONE = "done"
    FAILED = "failed"


def base_commands(composer, php, directory, windows=False):
    """Commands that create the framework skeleton in directory."""
    commands = [
        f'{composer} create-project laravel/laravel "{directory}" --remove-vcs --prefer-dist --no-scripts',
        f'{composer} run post-root-package-install -d "{directory}"',
        f'{php} "{directory}/artisan" key:generate --ansi',
    ]
    if not windows:
        commands.append(f'chmod 755 "{directory}/artisan"')
    return commands


def extras_commands(composer, package):
    """Register every repository in the package chain, then require the last one."""
    chain = package_chain(package)
    commands = [
        f"{composer} config repositories.{repo} vcs https://github.com/{repo}.git"
        for repo in chain
    ]
    commands.append(f"{composer} require {chain[-1]} --with-all-dependencies --no-cache")
    return commands


def build_install_flags(toggles):
    """Turn toggles into flags: True -> --key, str -> --key=<quoted>, falsy -> omitted."""
    flags = []
    for key, value in toggles.items():
        if isinstance(value, str):
            flags.append(f"--{key}={quote_for_shell(value)}")
        elif value:
            flags.append(f"--{key}")
    return flags


def install_command(php, directory, toggles):
    return " ".join([f'{php} "{directory}/artisan" solaris:install'] + build_install_flags(toggles))


def follow_up_commands(php, directory):
    return [
        f'{php} "{directory}/artisan" reverb:install -q -n',
        f'{php} "{directory}/artisan" install:broadcasting --without-node --force --reverb',
    ]


@dataclass
class ScaffoldServices:
    """Collaborators the scaffolder drives."""
    runner: object
    runtime: object
    prompter: object
    echo: Callable = field(default=click.echo)


class Scaffolder:
    """Runs one `solaris new` invocation from prompts to follow-up commands."""

    def __init__(self, request, services, cwd=None, windows=None):
        self.request = request
        self._runner = services.runner
        self._runtime = services.runtime
        self._prompter = services.prompter
        self._echo = services.echo
        self._cwd = cwd or os.getcwd()
        self._windows = sys.platform == "win32" if windows is None else windows
        self.stage = ScaffoldStage.COLLECTING_INPUT
        self.last_result = None

    @property
    def directory(self):
        return installation_directory(self.request.project_name, cwd=self._cwd)

    def run(self) -> int:
        """Execute every stage in order and return the final exit code."""
        try:
            self._prepare()
        except InstallerError:
            self.stage = ScaffoldStage.FAILED
            raise

        if self.request.backend != Backend.LARAVEL.value:
            self._echo(f"The {self.request.backend} backend cannot be installed yet. Nothing to do.")
            self.stage = ScaffoldStage.DONE
            return 0

        return self._install_laravel()

    def _prepare(self):
        self.stage = ScaffoldStage.COLLECTING_INPUT
        extensions = () if self.request.database else self._runtime.loaded_extensions()
        resolve_missing(self.request, self._prompter, extensions, guard=self._guard_name)

        self.stage = ScaffoldStage.VALIDATING
        validate_request(self.request)

        self.stage = ScaffoldStage.GUARDING_TARGET
        ensure_target_available(self.directory, cwd=self._cwd)
        if self.request.backend == Backend.LARAVEL.value:
            self._runtime.ensure_extensions_are_available()

    def _guard_name(self, name):
        ensure_target_available(installation_directory(name, cwd=self._cwd), cwd=self._cwd)

    def _run_batch(self, stage, commands, cwd=None) -> ProcessResult:
        self.stage = stage
        self.last_result = self._runner.run(commands, cwd=cwd)
        if not self.last_result.successful:
            self.stage = ScaffoldStage.FAILED
        return self.last_result

    def _install_laravel(self) -> int:
        directory = self.directory
        composer = self._runtime.find_composer(directory)
        php = self._runtime.php_binary()

        result = self._run_batch(
            ScaffoldStage.CREATING_BASE,
            base_commands(composer, php, directory, windows=self._windows),
        )
        if not result.successful:
            return result.exit_code

        write_auth_json(directory, self.request.token)
        append_gitignore(directory)
        result = self._run_batch(
            ScaffoldStage.INSTALLING_EXTRAS,
            extras_commands(composer, self.request.package),
            cwd=directory,
        )
        if not result.successful:
            return result.exit_code

        self.stage = ScaffoldStage.PATCHING_CONFIG
        configure_app_url(directory)
        configure_database_connection(directory, self.request.database_config())
        configure_redis(directory, self.request.redis_db, self.request.redis_cache_db)
        result = self._run_batch(
            ScaffoldStage.PATCHING_CONFIG,
            [install_command(php, directory, self.request.install_toggles)],
            cwd=directory,
        )
        if not result.successful:
            return result.exit_code

        result = self._run_batch(
            ScaffoldStage.RUNNING_FOLLOW_UPS,
            follow_up_commands(php, directory),
            cwd=directory,
        )
        if not result.successful:
            return result.exit_code

        self.stage = ScaffoldStage.DONE
        self._echo(render_template(
            "next_steps.j2",
            directory=directory,
            name=self.request.project_name,
            package_label=PACKAGE_LABELS[Package(self.request.package)],
            php=php,
            npm=self.request.npm,
            migrate=self.request.migrate,
        ))
        return result.exit_code
