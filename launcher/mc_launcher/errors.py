from __future__ import annotations


class LauncherError(Exception):
    """Base class for errors that abort a single launcher action."""


class FetchError(LauncherError):
    pass


class SourceNotFoundError(FetchError):
    pass


class PropertiesError(LauncherError):
    pass


class PluginNotFoundError(LauncherError):
    pass


class CatalogError(LauncherError):
    pass


class UnknownVersionError(CatalogError):
    pass


class ProcessLaunchError(LauncherError):
    pass
