"""Click command for creating a new Solaris application."""

import sys
from contextlib import contextmanager

import click

from solaris_installer.command_runner import CommandRunner, output_is_decorated
from solaris_installer.new_cmd.errors import InstallerError
from solaris_installer.new_cmd.options import DATABASE_DRIVERS, PACKAGES
from solaris_installer.new_cmd.php_runtime import PhpRuntime
from solaris_installer.new_cmd.prompts import ClickPrompter, DefaultsPrompter
from solaris_installer.new_cmd.scaffold_request import ScaffoldRequest
from solaris_installer.new_cmd.scaffolder import Scaffolder, ScaffoldServices
from solaris_installer.templates.template_renderer import render_template


@contextmanager
def with_error_handling():
    try:
        yield
    except InstallerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _single_choice(kind, **flags):
    """Return the one flag that is set, or None; more than one is a usage error."""
    chosen = [name for name, is_set in flags.items() if is_set]
    if len(chosen) > 1:
        raise click.UsageError(
            f"Choose only one {kind}: {', '.join('--' + name for name in chosen)}"
        )
    return chosen[0] if chosen else None


@click.command("new")
@click.argument("name", required=False)
@click.argument("token", required=False, envvar="SOLARIS_TOKEN")
@click.option("--package", help=f"Install solaris package. Possible values are: {', '.join(PACKAGES)}")
@click.option("--laravel", is_flag=True, help="PHP Laravel backend")
@click.option("--fiber", is_flag=True, help="Go Fiber backend")
@click.option("--netcore", is_flag=True, help="C# ASP.Net Core backend")
@click.option("--blade", is_flag=True, help="Install Laravel Blade Solar UI starter kit")
@click.option("--vue", is_flag=True, help="Install Solar Vue starter kit")
@click.option("--react", is_flag=True, help="Install Solar React starter kit")
@click.option("--database", help=f"The database driver your application will use. Possible values are: {', '.join(DATABASE_DRIVERS)}")
@click.option("--db_host", help="Database host")
@click.option("--db_port", help="Database port")
@click.option("--db_name", help="Database name")
@click.option("--db_username", help="Database username")
@click.option("--db_password", help="Database password")
@click.option("--redis_db", help="Redis DB index")
@click.option("--redis_cache_db", help="Redis cache DB index")
@click.option("--npm/--no-npm", default=None, help="Run npm install after package.json is updated")
@click.option("--migrate/--no-migrate", default=None, help="Run the database migrations after install")
@click.option("--seeder/--no-seeder", default=None, help="Run the database seeder after install")
@click.option("--ansi/--no-ansi", default=None, help="Force (or disable) colored command output")
@click.option("-n", "--no-interaction", is_flag=True, help="Do not ask any question; use defaults")
@click.pass_obj
def new_cmd(obj, name, token, package, laravel, fiber, netcore, blade, vue, react,
            database, db_host, db_port, db_name, db_username, db_password,
            redis_db, redis_cache_db, npm, migrate, seeder, ansi, no_interaction):
    """Create a new Solaris application."""
    request = ScaffoldRequest(
        name=name,
        token=token,
        package=package,
        backend=_single_choice("backend", laravel=laravel, fiber=fiber, netcore=netcore),
        frontend=_single_choice("frontend", blade=blade, vue=vue, react=react),
        database=database,
        db_host=db_host,
        db_port=db_port,
        db_name=db_name,
        db_username=db_username,
        db_password=db_password,
        redis_db=redis_db,
        redis_cache_db=redis_cache_db,
        npm=npm,
        migrate=migrate,
        seeder=seeder,
    )

    runtime = PhpRuntime()
    runner = CommandRunner(
        decorated=output_is_decorated() if ansi is None else ansi,
        tty=sys.stdout.isatty(),
        php_binary=runtime.php_binary(),
        verbose=bool(obj and obj.get("verbose")),
    )

    if no_interaction:
        prompter = DefaultsPrompter()
    else:
        prompter = ClickPrompter()
        click.echo(click.style(render_template("banner.j2"), fg="yellow"))

    with with_error_handling():
        exit_code = Scaffolder(request, ScaffoldServices(runner, runtime, prompter)).run()
    sys.exit(exit_code)
