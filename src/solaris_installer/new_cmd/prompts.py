"""Fill in the fields of a ScaffoldRequest that were not given on the command line."""

import click

from solaris_installer.new_cmd.menu import MenuConfig, select
from solaris_installer.new_cmd.options import (
    Backend,
    backend_options,
    database_options,
    default_database_port,
    default_frontend,
    frontend_options,
    package_options,
)
from solaris_installer.new_cmd.validator import NAME_RULE, is_valid_project_name

DEFAULT_DB_HOST = "127.0.0.1"
DEFAULT_DB_NAME = "solaris"
DEFAULT_DB_USERNAME = "root"
DEFAULT_REDIS_DB = "0"
DEFAULT_REDIS_CACHE_DB = "1"


def _check_answer(value, required, validate):
    if required and not value:
        return required
    if validate is not None:
        return validate(value)
    return None


class ClickPrompter:
    """Asks questions on the terminal."""

    def __init__(self, menu_config=None):
        self._menu_config = menu_config or MenuConfig()

    def text(self, label, default=None, required=None, validate=None):
        while True:
            value = click.prompt(
                label,
                default=default if default is not None else "",
                show_default=bool(default),
                err=True,
            )
            error = _check_answer(value, required, validate)
            if error is None:
                return value
            click.echo(error, err=True)

    def password(self, label, required=None):
        while True:
            value = click.prompt(label, default="", hide_input=True, show_default=False, err=True)
            error = _check_answer(value, required, None)
            if error is None:
                return value
            click.echo(error, err=True)

    def select(self, label, options, default=None):
        return select(label, options, default, config=self._menu_config)

    def confirm(self, label, default=True):
        return click.confirm(label, default=default, err=True)


class DefaultsPrompter:
    """Answers every question with its default, for --no-interaction runs."""

    def text(self, label, default=None, required=None, validate=None):
        if default is None and required:
            raise click.UsageError(required)
        return default if default is not None else ""

    def password(self, label, required=None):
        if required:
            raise click.UsageError(required)
        return ""

    def select(self, label, options, default=None):
        return default if default is not None else options[0][0]

    def confirm(self, label, default=True):
        return default


def _name_error(value):
    if not is_valid_project_name(value):
        return NAME_RULE
    return None


def resolve_missing(request, prompter, loaded_extensions=(), guard=None):
    """Ask for every unset field of request, in order, and store the answers.

    Later questions depend on earlier answers: the frontend choices depend on
    the backend and the default port depends on the database driver.
    guard, when given, is called with the project name as soon as it is known.
    """
    if not request.name:
        request.name = prompter.text(
            "What is the name of your project?",
            required="The project name is required.",
            validate=_name_error,
        )

    if guard is not None:
        guard(request.project_name)

    if not request.token:
        request.token = prompter.password("Enter your solaris token", required="Token is required.")

    if not request.package:
        options = package_options()
        request.package = prompter.select(
            "Which package will your application use?", options, default=options[0][0],
        )

    if not request.backend:
        request.backend = prompter.select(
            "Which backend would you like to install?",
            backend_options(),
            default=Backend.LARAVEL.value,
        )

    if not request.frontend:
        request.frontend = prompter.select(
            "Which frontend would you like to install?",
            frontend_options(request.backend),
            default=default_frontend(request.backend),
        )

    if not request.database:
        options = database_options(loaded_extensions)
        request.database = prompter.select(
            "Which database will your application use?", options, default=options[0][0],
        )

    if not request.db_host:
        request.db_host = prompter.text("Database host", default=DEFAULT_DB_HOST)

    if not request.db_port:
        request.db_port = prompter.text("Database port", default=default_database_port(request.database))

    if not request.db_name:
        request.db_name = prompter.text("Database name", default=DEFAULT_DB_NAME)

    if not request.db_username:
        request.db_username = prompter.text("Database username", default=DEFAULT_DB_USERNAME)

    if request.db_password is None:
        request.db_password = prompter.password("Database password")

    if not request.redis_db:
        request.redis_db = prompter.text("Redis DB index", default=DEFAULT_REDIS_DB)

    if not request.redis_cache_db:
        request.redis_cache_db = prompter.text("Redis Cache DB index", default=DEFAULT_REDIS_CACHE_DB)

    if request.npm is None:
        request.npm = prompter.confirm("Would you like to run the npm install after package.json updated")

    if request.migrate is None:
        request.migrate = prompter.confirm("Would you like to run the database migrations")

    if request.seeder is None:
        request.seeder = prompter.confirm("Would you like to run the database seeder")

    return request
