"""Exceptions raised while building the endpoint schema.

Every fatal condition aborts the whole run; nothing partial is written.
"""


class SchemaBuildError(Exception):
    """Base exception for schema build failures."""
    pass


class ConfigError(SchemaBuildError):
    """Raised when a configuration file cannot be loaded."""
    pass


class FetchError(SchemaBuildError):
    """Raised when a documentation page does not return status 200."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Received status: {status_code} ({url})")


class GrammarError(SchemaBuildError):
    """Raised when the extraction grammar does not cover the input."""
    pass


class ReferenceValidationError(SchemaBuildError):
    """Raised with the batch of unresolved names found by validation."""

    def __init__(self, message: str, names: list[str]):
        self.names = names
        super().__init__(f"Found {len(names)} {message}:\n" + "\n".join(names))


class NamingConflictError(SchemaBuildError):
    """Raised when two endpoints are assigned the same name."""

    def __init__(self, name: str, url: str, previous_url: str):
        self.name = name
        self.url = url
        self.previous_url = previous_url
        super().__init__(
            f'Endpoint naming conflict for "{url}" ({name})\n'
            f'Previously "{previous_url}" was also assigned this name.'
        )
