"""Patch the generated .env and .env.example files with the chosen settings."""

import os
import re

from solaris_installer.file_patcher import (
    preg_replace_in_file,
    replace_in_file,
    set_env_value,
)
from solaris_installer.new_cmd.options import DatabaseDriver

ENV_FILES = (".env", ".env.example")

# Database lines as they ship in the framework skeleton.
DATABASE_DEFAULTS = (
    "DB_HOST=127.0.0.1",
    "DB_PORT=3306",
    "DB_DATABASE=laravel",
    "DB_USERNAME=root",
    "DB_PASSWORD=",
)

FILE_BASED_DRIVERS = (DatabaseDriver.SQLITE.value,)


def _env_files(directory):
    return [os.path.join(directory, name) for name in ENV_FILES]


def _replace_in_env_files(directory, search, replace):
    for path in _env_files(directory):
        replace_in_file(search, replace, path)


def _preg_replace_in_env_files(directory, pattern, replace):
    for path in _env_files(directory):
        preg_replace_in_file(pattern, replace, path)


def database_name(name):
    return name.lower().replace("-", "_")


def configure_app_url(directory, port=8000):
    replace_in_file(
        "APP_URL=http://localhost",
        f"APP_URL=http://localhost:{port}",
        os.path.join(directory, ".env"),
    )


def configure_redis(directory, redis_db, redis_cache_db):
    env_file = os.path.join(directory, ".env")
    set_env_value("REDIS_DB", redis_db, env_file)
    set_env_value("REDIS_CACHE_DB", redis_cache_db, env_file)


def comment_database_configuration(directory):
    """Comment out the default host/port/name/credential lines.

    Only whole uncommented lines match, so running this again is a no-op.
    Lines may end in LF or CRLF.
    """
    patterns = [rf"^({re.escape(line)})(?=\r?$)" for line in DATABASE_DEFAULTS]
    _preg_replace_in_env_files(directory, patterns, [r"# \1"] * len(patterns))


def uncomment_database_configuration(directory):
    commented = [f"# {line}" for line in DATABASE_DEFAULTS]
    _replace_in_env_files(directory, commented, list(DATABASE_DEFAULTS))


def configure_database_connection(directory, db_config):
    """Point both env files at the chosen database.

    db_config keys: db, db_host, db_port, db_name, db_username, db_password.
    """
    database = db_config["db"]

    _preg_replace_in_env_files(directory, r"DB_CONNECTION=[^\r\n]*", f"DB_CONNECTION={database}")

    if database in FILE_BASED_DRIVERS:
        comment_database_configuration(directory)
        return

    uncomment_database_configuration(directory)

    _replace_in_env_files(
        directory,
        list(DATABASE_DEFAULTS),
        [
            f"DB_HOST={db_config['db_host']}",
            f"DB_PORT={db_config['db_port']}",
            f"DB_DATABASE={database_name(db_config['db_name'])}",
            f"DB_USERNAME={db_config['db_username']}",
            f"DB_PASSWORD={db_config['db_password'] or ''}",
        ],
    )
