"""Error types raised while parsing frontmatter YAML."""


class YamlError(ValueError):
    """Base error for malformed frontmatter YAML."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)


class YamlIndentationError(YamlError):
    """Raised when a line is indented inconsistently with its container."""


class ScalarFormatError(YamlError):
    """Raised when a token is not a valid number, boolean, or null."""


class UnterminatedLiteralError(YamlError):
    """Raised when a quote or bracket is never closed."""


class KeyFormatError(YamlError):
    """Raised when a mapping entry is missing its colon separator."""
