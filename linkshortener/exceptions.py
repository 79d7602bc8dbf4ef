"""Application-level errors raised outside the data access layer.

Store-level failures (unknown codes, expired links, connectivity) live in
`linkshortener.dao.exceptions`. The errors here cover caller input and the
startup configuration read from the environment.
"""


class LinkShortenerError(Exception):
    """Root of the application's own exceptions."""


class InvalidInputError(LinkShortenerError):
    """A URL, click limit or credential was rejected before anything changed."""


class ConfigurationError(LinkShortenerError):
    """The process environment doesn't describe a usable setup."""


class MissingEnvironmentVariableError(ConfigurationError):
    """A variable the selected backend needs (e.g. REDIS_HOST) is unset or empty."""


class BadConfigurationError(ConfigurationError):
    """A setting is present but unusable, e.g. an unknown backend name."""
