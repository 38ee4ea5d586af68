"""Error taxonomy for configuration resolution and catalog loading."""

from typing import Optional


class MarkdownStyleError(Exception):
    """Base class for every error raised by the linter."""


class ConfigurationError(MarkdownStyleError):
    """A style or directive sequence cannot be resolved. Fatal before linting starts."""


class UnknownRule(ConfigurationError):
    """A directive names a rule code (or alias) that is not in the registry."""

    def __init__(self, code: str, directive_index: Optional[int] = None) -> None:
        self.code = code
        self.directive_index = directive_index
        where = f" (directive #{directive_index})" if directive_index is not None else ""
        super().__init__(f"Unknown rule '{code}'{where}")


class UnknownTag(ConfigurationError):
    """A tag directive names a tag that no rule carries."""

    def __init__(self, tag: str, directive_index: Optional[int] = None) -> None:
        self.tag = tag
        self.directive_index = directive_index
        where = f" (directive #{directive_index})" if directive_index is not None else ""
        super().__init__(f"Unknown tag '{tag}'{where}")


class InvalidParameter(ConfigurationError):
    """A rule parameter has the wrong type, a disallowed value, or does not exist."""

    def __init__(
        self,
        code: str,
        parameter: str,
        expected: str,
        given: object,
        directive_index: Optional[int] = None,
    ) -> None:
        self.code = code
        self.parameter = parameter
        self.expected = expected
        self.given = given
        self.directive_index = directive_index
        where = f" (directive #{directive_index})" if directive_index is not None else ""
        super().__init__(
            f"Invalid parameter '{parameter}' for rule {code}: "
            f"expected {expected}, got {given!r}{where}"
        )


class StyleSyntaxError(ConfigurationError):
    """A style file line could not be parsed."""

    def __init__(self, source: str, line_no: int, text: str, reason: str = "unrecognised directive") -> None:
        self.source = source
        self.line_no = line_no
        self.text = text
        self.reason = reason
        super().__init__(f"{source}:{line_no}: {reason}: {text.strip()}")


class CatalogError(MarkdownStyleError):
    """The packaged rule catalog is inconsistent with the registered checks."""
