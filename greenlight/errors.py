"""Exception types raised by GreenlightIQ."""


class GreenlightError(Exception):
    """Base error for the package."""
    pass


class CatalogError(GreenlightError):
    """Catalog file missing or malformed."""
    pass


class VersionSequenceError(GreenlightError):
    """Version numbers for a project are not gapless and increasing."""
    pass
