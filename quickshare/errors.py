"""Error taxonomy for catalog, selector and gateway failures."""

from __future__ import annotations


class QuickShareError(Exception):
    """Base class for all recoverable quickshare errors."""

    title = "Operation Failed"


class ValidationError(QuickShareError, ValueError):
    """A preset, category or item name/step was rejected locally."""

    title = "Invalid Input"


class PermissionDeniedError(QuickShareError):
    """A mutation targeted the read-only default preset."""

    title = "Not Allowed"


class NotFoundError(QuickShareError, LookupError):
    """An id did not resolve against the default preset or the cache."""

    title = "Not Found"


class RemoteError(QuickShareError):
    """The sync gateway reported a failure."""

    title = "Sync Failed"


class UnavailableError(QuickShareError):
    """The sync gateway is offline; nothing was contacted."""

    title = "Feature Unavailable"


class ConfigurationError(QuickShareError):
    """The static default catalog is missing or malformed."""

    title = "Configuration Error"
