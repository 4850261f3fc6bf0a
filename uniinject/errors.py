"""
Exceptions raised before any document is transformed.

Per-document problems never raise out of the engine; they are reported
through TransformResult (see uniinject.pipeline). The errors here cover
setup: bad options files and component paths that cannot be resolved.
"""


class ConfigError(ValueError):
    """Options file or page manifest is missing, unreadable or invalid."""


class ComponentPathError(ValueError):
    """The component to inject cannot be resolved to a valid .vue file."""
