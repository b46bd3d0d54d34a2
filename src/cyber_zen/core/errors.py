"""Exceptions raised by cyber-zen commands."""


class CyberZenError(Exception):
    """Base class for errors reported to the operator."""


class UserInputError(CyberZenError):
    """Bad arguments: rate, port, paths, or a declined prompt."""


class ToolEnvironmentError(CyberZenError):
    """The host is not in a usable state (no git repo, port taken, ...)."""


class ConfigError(CyberZenError):
    """A configuration document is missing or malformed."""


class CompressionError(CyberZenError):
    """A single file could not be compressed."""
