"""Protocol for violation reporting - no infrastructure imports."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from markdown_style_linter.domain.entities import CorpusResult


class ViolationReporter(Protocol):
    """Protocol for rendering the result of a corpus run."""

    def report(self, result: "CorpusResult", show_aliases: bool = False) -> None:
        """Report violations to the user. With show_aliases, rule aliases replace codes."""
        ...
