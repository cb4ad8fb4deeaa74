"""Plugin error types."""


class PluginError(Exception):
    """Base class for plugin system errors."""
    pass


class AttributeNotFoundError(PluginError):
    """Raised when a plugin field that does not exist is set."""

    def __init__(self, attribute: str, plugin: object | None = None):
        self.attribute = attribute
        self.plugin = plugin
        owner = type(plugin).__name__ if plugin is not None else "plugin"
        super().__init__(f"{owner} has no attribute '{attribute}'")


class PluginNotFoundError(PluginError):
    """Raised when a plugin is not a member of the registry it is used with."""
    pass


class PluginLoadError(PluginError):
    """Raised when a plugin source cannot be turned into a Plugin instance."""
    pass
