"""Framework skeleton files as a fresh Laravel install leaves them."""

import os

# The skeleton .env as shipped by a fresh framework install: SQLite with
# the server settings commented out.
SKELETON_ENV = """APP_NAME=Laravel
APP_ENV=local
APP_KEY=
APP_DEBUG=true
APP_URL=http://localhost

LOG_CHANNEL=stack

DB_CONNECTION=sqlite
# DB_HOST=127.0.0.1
# DB_PORT=3306
# DB_DATABASE=laravel
# DB_USERNAME=root
# DB_PASSWORD=

SESSION_DRIVER=database

REDIS_CLIENT=phpredis
REDIS_HOST=127.0.0.1
REDIS_PASSWORD=null
REDIS_PORT=6379
"""

# Older skeletons ship MySQL settings uncommented.
MYSQL_ENV = """APP_NAME=Laravel
APP_URL=http://localhost

DB_CONNECTION=mysql
DB_HOST=127.0.0.1
DB_PORT=3306
DB_DATABASE=laravel
DB_USERNAME=root
DB_PASSWORD=

REDIS_HOST=127.0.0.1
"""


def write_skeleton(directory, env=SKELETON_ENV):
    """Create the files the framework generator would leave in directory."""
    os.makedirs(directory, exist_ok=True)
    for name in (".env", ".env.example"):
        with open(os.path.join(directory, name), "w", encoding="utf-8") as f:
            f.write(env)
    with open(os.path.join(directory, ".gitignore"), "w", encoding="utf-8") as f:
        f.write("/vendor\n.env\n")
    with open(os.path.join(directory, "artisan"), "w", encoding="utf-8") as f:
        f.write("#!/usr/bin/env php\n")


def read_file(directory, name):
    with open(os.path.join(directory, name), encoding="utf-8") as f:
        return f.read()
