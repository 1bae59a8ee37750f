"""Files the installer writes into the new project itself."""

import json
import os

AUTH_FILE = "auth.json"


def write_auth_json(directory, token):
    """Write Composer credentials granting token access to the private GitHub repositories."""
    path = os.path.join(directory, AUTH_FILE)
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"github-oauth": {"github.com": token}}, f, indent=4)
        f.write("\n")
    return path


def append_gitignore(directory, entry=AUTH_FILE):
    """Add entry to the project's .gitignore unless it is already listed."""
    path = os.path.join(directory, ".gitignore")
    content = ""
    if os.path.isfile(path):
        with open(path, encoding="utf-8") as f:
            content = f.read()

    if entry in (line.strip() for line in content.splitlines()):
        return False

    if content and not content.endswith("\n"):
        content += "\n"
    with open(path, "w", encoding="utf-8") as f:
        f.write(content + entry + "\n")
    return True
