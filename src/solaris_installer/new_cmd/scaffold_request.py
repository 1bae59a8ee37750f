"""Options dataclass for the new command."""

from dataclasses import dataclass


@dataclass
class ScaffoldRequest:
    """Everything one `solaris new` run needs. None means not supplied yet."""

    name: str | None = None
    token: str | None = None
    package: str | None = None
    backend: str | None = None
    frontend: str | None = None
    database: str | None = None
    db_host: str | None = None
    db_port: str | None = None
    db_name: str | None = None
    db_username: str | None = None
    db_password: str | None = None
    redis_db: str | None = None
    redis_cache_db: str | None = None
    npm: bool | None = None
    migrate: bool | None = None
    seeder: bool | None = None

    @property
    def project_name(self):
        """The name with trailing path separators removed."""
        return self.name.rstrip("/\\") if self.name else self.name

    @property
    def install_toggles(self):
        """Flags passed to `artisan solaris:install`, in a fixed order."""
        return {
            "npm-install": self.npm,
            "migrate": self.migrate,
            "seeder": self.seeder,
        }

    def database_config(self):
        return {
            "db": self.database,
            "db_name": self.db_name,
            "db_host": self.db_host,
            "db_port": self.db_port,
            "db_username": self.db_username,
            "db_password": self.db_password,
        }
