"""Error types raised by the plant catalog."""


class CatalogError(Exception):
    """Base class for all catalog errors."""


class LoadError(CatalogError):
    """A dataset or detail record could not be fetched."""


class ParseError(CatalogError, ValueError):
    """A payload was fetched but is not the JSON document we expect."""


class CatalogNotReadyError(CatalogError, RuntimeError):
    """Search or filter input arrived before the dataset finished loading."""
