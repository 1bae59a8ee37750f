"""Whole-file find/replace helpers: literal, regex, and KEY=value lines."""

import os
import re
import tempfile


def atomic_write(file_path: str, content: str) -> None:
    """Write content to file atomically using temp file + rename."""
    dir_name = os.path.dirname(os.path.abspath(file_path))
    fd, tmp_path = tempfile.mkstemp(dir=dir_name, suffix='.tmp')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
        os.replace(tmp_path, file_path)
    except Exception:
        os.unlink(tmp_path)
        raise


def _read(file_path):
    with open(file_path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _as_pairs(search, replace):
    if isinstance(search, str):
        search = [search]
    if isinstance(replace, str):
        replace = [replace] * len(search)
    if len(search) != len(replace):
        raise ValueError("search and replace lists must have the same length")
    return list(zip(search, replace))


def replace_literal(search, replace, text):
    """Replace every occurrence of each search string in a single pass.

    search and replace may be strings or parallel lists. At each position the
    longest matching search string wins; replaced text is never rescanned.
    """
    mapping = {}
    for needle, substitute in _as_pairs(search, replace):
        if needle and needle not in mapping:
            mapping[needle] = substitute
    if not mapping:
        return text
    pattern = re.compile("|".join(re.escape(n) for n in sorted(mapping, key=len, reverse=True)))
    return pattern.sub(lambda m: mapping[m.group(0)], text)


def replace_pattern(pattern, replace, text):
    """Apply one regex substitution, or a list of them in order."""
    for regex, substitute in _as_pairs(pattern, replace):
        text = re.sub(regex, substitute, text, flags=re.MULTILINE)
    return text


def replace_in_file(search, replace, file_path):
    """Literal find/replace over the whole file."""
    atomic_write(file_path, replace_literal(search, replace, _read(file_path)))


def preg_replace_in_file(pattern, replace, file_path):
    """Regex find/replace over the whole file. Patterns are matched per line (re.MULTILINE)."""
    atomic_write(file_path, replace_pattern(pattern, replace, _read(file_path)))


def set_env_value(key, value, file_path):
    """Set KEY=value in an env file, appending the line when the key is absent."""
    text = _read(file_path)
    line = f"{key}={value}"
    pattern = re.compile(rf"^{re.escape(key)}=[^\r\n]*", re.MULTILINE)
    if pattern.search(text):
        text = pattern.sub(lambda _: line, text)
    else:
        newline = "\r\n" if "\r\n" in text else "\n"
        if text and not text.endswith("\n"):
            text += newline
        text += line + newline
    atomic_write(file_path, text)
