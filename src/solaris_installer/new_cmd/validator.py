"""Allow-list checks run once before any external command executes."""

from solaris_installer.new_cmd.errors import InvalidOption
from solaris_installer.new_cmd.options import (
    DATABASE_DRIVERS,
    PACKAGES,
    Backend,
    Frontend,
)

NAME_RULE = "The name may only contain letters, numbers, dashes, underscores, and periods."


def is_valid_project_name(value):
    """Letters and numbers from any script, plus '-', '_' and '.'."""
    return bool(value) and all(ch.isalnum() or ch in "-_." for ch in value)


def validate_package(package):
    if package and package not in PACKAGES:
        raise InvalidOption(
            "package", package, PACKAGES,
            f"Invalid solaris package [{package}]. Possible values are: {', '.join(PACKAGES)}.",
        )


def validate_database(database):
    if database and database not in DATABASE_DRIVERS:
        raise InvalidOption(
            "database", database, DATABASE_DRIVERS,
            f"Invalid database driver [{database}]. Possible values are: {', '.join(DATABASE_DRIVERS)}.",
        )


def validate_stack(backend, frontend):
    """Reject a Blade frontend on a backend that cannot render it."""
    if frontend == Frontend.BLADE.value and backend and backend != Backend.LARAVEL.value:
        raise InvalidOption(
            "frontend", frontend, [Frontend.VUE.value, Frontend.REACT.value],
            f"The {frontend} frontend requires the laravel backend.",
        )


def validate_request(request):
    """Raise InvalidOption for the first field outside its allow-list."""
    name = request.project_name
    if name and name != "." and not is_valid_project_name(name):
        raise InvalidOption("name", name, [], NAME_RULE)
    validate_package(request.package)
    validate_database(request.database)
    validate_stack(request.backend, request.frontend)
