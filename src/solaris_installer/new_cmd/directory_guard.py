"""Installation directory resolution and the already-exists guard."""

import os

from solaris_installer.new_cmd.errors import TargetAlreadyExists


def installation_directory(name, cwd=None):
    """Return the directory the application is created in.

    The name "." means install into the current directory.
    """
    if name == ".":
        return "."
    return os.path.join(cwd or os.getcwd(), name)


def ensure_target_available(path, cwd=None):
    """Raise TargetAlreadyExists unless path is free or is the current directory."""
    if not os.path.exists(path):
        return
    current = os.path.realpath(cwd or os.getcwd())
    if os.path.realpath(path) == current:
        return
    raise TargetAlreadyExists(path)
