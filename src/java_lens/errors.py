# --- Exceptions -------------------------------------------------------------

class JavaLensError(Exception):
    """Base class for everything java_lens raises on purpose."""


class GrammarUnavailableError(JavaLensError):
    """The tree-sitter Java grammar could not be loaded."""


class JavaParseError(JavaLensError):
    """The grammar rejected the source text."""

    def __init__(self, message: str, offset: int = 0):
        super().__init__(message)
        self.offset = offset


class ConfigError(JavaLensError):
    """A JAVA_LENS_* environment variable holds an unusable value."""
