"""Errors raised before the installer touches the filesystem or network."""


class InstallerError(Exception):
    """Base class for user-facing installer errors."""


class InvalidOption(InstallerError, ValueError):
    """An enum-constrained option was given a value outside its allow-list."""

    def __init__(self, field, value, allowed, message=None):
        self.field = field
        self.value = value
        self.allowed = tuple(allowed)
        if message is None:
            message = (
                f"Invalid {field} [{value}]. "
                f"Possible values are: {', '.join(self.allowed)}."
            )
        super().__init__(message)


class TargetAlreadyExists(InstallerError):

    def __init__(self, path):
        self.path = path
        super().__init__("Application already exists!")


class PhpUnavailable(InstallerError):

    def __init__(self, reason):
        self.reason = reason
        super().__init__(f"PHP is required but could not be run: {reason}")


class MissingRuntimeExtension(InstallerError):

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(
            "The following PHP extensions are required but are not installed: "
            + join_with_final(self.missing, ", ", ", and ")
        )


def join_with_final(items, glue, final_glue):
    """Join items with glue, using final_glue before the last one."""
    items = list(items)
    if len(items) <= 1:
        return "".join(items)
    return glue.join(items[:-1]) + final_glue + items[-1]
