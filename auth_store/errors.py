"""
Bootstrap failures. All of them are fatal: the host must not start serving when one is raised.
"""


class BootstrapError(Exception):
    """Base class for store bootstrap failures."""


class ConnectivityFailure(BootstrapError):
    """The store could not be reached when bootstrap began."""

    def __init__(self, url: str):
        super().__init__(f"Store unreachable: {url}")
        self.url = url


class MigrationFailure(BootstrapError):
    """A schema migration for one store could not be applied."""

    def __init__(self, store: str, reason: str = ""):
        message = f"Migration failed for {store} store"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.store = store


class SeedWriteFailure(BootstrapError):
    """Inserting the baseline rows of one category failed. Earlier categories stay committed."""

    def __init__(self, category: str, reason: str = ""):
        message = f"Seeding {category} failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.category = category
