"""Exception hierarchy for varpick."""

__all__ = ["VarpickError", "ConfigurationError", "CatalogError"]


class VarpickError(Exception):
    """Base class for all varpick errors."""


class ConfigurationError(VarpickError):
    """Raised when the picker cannot be built from the given collaborators or options.

    Construction fails as a whole; no partially initialized picker is returned.
    """


class CatalogError(ConfigurationError):
    """Raised when raw catalog data cannot be turned into catalog nodes."""
