"""
Exceptions raised by Orogene. Every one of them aborts the build.
"""


class OrogeneError(Exception):
    """Base class for all fatal build errors."""


class BuildError(OrogeneError):
    """Reading an input or writing the output tree failed."""


class FrontMatterError(OrogeneError, ValueError):
    """A post has a missing or malformed front matter block or date."""


class ConfigError(OrogeneError):
    """The site configuration is missing or unusable."""


class MinifyError(OrogeneError):
    """The HTML minifier rejected a generated page."""
