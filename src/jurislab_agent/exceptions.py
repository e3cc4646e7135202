"""Custom exceptions for the JurisLab search agent."""


class JurisLabError(Exception):
    """Base exception for JurisLab errors."""

    pass


class InvalidQueryError(JurisLabError):
    """Raised when the search text is empty after trimming."""

    pass


class ConfigurationError(JurisLabError):
    """Raised when a search cannot start because of how it was set up."""

    pass


class NoSourcesSelectedError(ConfigurationError):
    """Raised when no court is left to search after category filtering."""

    pass


class CatalogError(ConfigurationError):
    """Raised when the court catalog is missing or malformed."""

    pass


class SourceSearchError(JurisLabError):
    """Raised by a searcher when a single court cannot be searched.

    The message is shown to the user as the reason in the court's warning.
    """

    pass
