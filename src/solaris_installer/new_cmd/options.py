"""Fixed option tables for the new command: packages, backends, frontends, databases."""

from enum import Enum
from types import MappingProxyType


class Package(str, Enum):
    CORE = "core"
    MASTER_DATA = "master-data"
    SALES = "sales"
    MARKETING = "marketing"
    SERVICE = "service"


class Backend(str, Enum):
    LARAVEL = "laravel"
    FIBER = "fiber"
    NETCORE = "netcore"


class Frontend(str, Enum):
    BLADE = "blade"
    VUE = "vue"
    REACT = "react"


class DatabaseDriver(str, Enum):
    MYSQL = "mysql"
    MARIADB = "mariadb"
    PGSQL = "pgsql"
    SQLSRV = "sqlsrv"
    SQLITE = "sqlite"


PACKAGES = tuple(p.value for p in Package)
DATABASE_DRIVERS = tuple(d.value for d in DatabaseDriver)

_VENDOR = "isystemasia"
_BASE = f"{_VENDOR}/solaris-laravel"
_MASTER_DATA = f"{_VENDOR}/solaris-laravel-masterdata"

# The last entry of each chain is the package that gets required;
# the earlier ones are only registered as repositories.
PACKAGE_CHAINS = MappingProxyType({
    Package.CORE: (_BASE,),
    Package.MASTER_DATA: (_BASE, _MASTER_DATA),
    Package.SALES: (_BASE, _MASTER_DATA, f"{_VENDOR}/solaris-laravel-sales"),
    Package.MARKETING: (_BASE, _MASTER_DATA, f"{_VENDOR}/solaris-laravel-marketing"),
    Package.SERVICE: (_BASE, _MASTER_DATA, f"{_VENDOR}/solaris-laravel-service"),
})

PACKAGE_LABELS = MappingProxyType({
    Package.CORE: "Core",
    Package.MASTER_DATA: "Master Data",
    Package.SALES: "Sales",
    Package.MARKETING: "Marketing",
    Package.SERVICE: "Service",
})

BACKEND_LABELS = MappingProxyType({
    Backend.LARAVEL: "PHP Laravel",
    Backend.FIBER: "Go Fiber",
    Backend.NETCORE: "C# ASP.Net Core",
})

FRONTEND_LABELS = MappingProxyType({
    Frontend.BLADE: "Laravel Blade - Solar UI",
    Frontend.VUE: "Solar Vue",
    Frontend.REACT: "Solar React",
})

DATABASE_LABELS = MappingProxyType({
    DatabaseDriver.MYSQL: "MySQL",
    DatabaseDriver.MARIADB: "MariaDB",
    DatabaseDriver.PGSQL: "PostgreSQL",
    DatabaseDriver.SQLSRV: "SQL Server",
    DatabaseDriver.SQLITE: "SQLite",
})

DATABASE_EXTENSIONS = MappingProxyType({
    DatabaseDriver.MYSQL: "pdo_mysql",
    DatabaseDriver.MARIADB: "pdo_mysql",
    DatabaseDriver.PGSQL: "pdo_pgsql",
    DatabaseDriver.SQLSRV: "pdo_sqlsrv",
    DatabaseDriver.SQLITE: "pdo_sqlite",
})

DEFAULT_PORTS = MappingProxyType({
    DatabaseDriver.MYSQL: "3306",
    DatabaseDriver.MARIADB: "3306",
    DatabaseDriver.PGSQL: "5432",
    DatabaseDriver.SQLSRV: "1433",
})

FALLBACK_PORT = "3306"
MISSING_EXTENSION_SUFFIX = " (Missing PDO extension)"


def package_chain(package):
    """Return the repository chain for a package value, most specific last."""
    return PACKAGE_CHAINS[Package(package)]


def package_options():
    """Return (value, label) pairs for the package menu."""
    return [(p.value, PACKAGE_LABELS[p]) for p in Package]


def backend_options():
    return [(b.value, BACKEND_LABELS[b]) for b in Backend]


def frontend_options(backend):
    """Return the (value, label) frontend pairs offered for a backend.

    Blade templates only make sense on top of the Laravel backend.
    """
    return [
        (f.value, FRONTEND_LABELS[f])
        for f in Frontend
        if f is not Frontend.BLADE or backend == Backend.LARAVEL.value
    ]


def default_frontend(backend):
    if backend == Backend.LARAVEL.value:
        return Frontend.BLADE.value
    return Frontend.VUE.value


def database_options(loaded_extensions):
    """Return (value, label) pairs for the database menu.

    Drivers whose PDO extension is missing sort last and are labelled as such.
    """
    loaded = {ext.lower() for ext in loaded_extensions}
    rows = [
        (driver, DATABASE_EXTENSIONS[driver] in loaded)
        for driver in DatabaseDriver
    ]
    rows.sort(key=lambda row: 0 if row[1] else 1)
    return [
        (driver.value, DATABASE_LABELS[driver] + ("" if available else MISSING_EXTENSION_SUFFIX))
        for driver, available in rows
    ]


def default_database_port(database):
    try:
        return DEFAULT_PORTS.get(DatabaseDriver(database), FALLBACK_PORT)
    except ValueError:
        return FALLBACK_PORT
