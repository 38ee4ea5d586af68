from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from markdown_style_linter.domain.rules import Violation


class DocumentStatus(Enum):
    """Outcome of one document in a corpus run."""
    LINTED = "linted"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass(frozen=True)
class DocumentResult:
    """Violations for one document, or the reason it was not linted."""
    path: str
    violations: tuple[Violation, ...] = ()
    status: DocumentStatus = DocumentStatus.LINTED
    error: Optional[str] = None


@dataclass(frozen=True)
class CorpusResult:
    """Result of linting a set of documents, in input order."""
    documents: tuple[DocumentResult, ...] = field(default_factory=tuple)
    cancelled: bool = False

    def has_violations(self) -> bool:
        """Check if any document produced violations."""
        return any(d.violations for d in self.documents)

    def has_errors(self) -> bool:
        return any(d.status is DocumentStatus.ERROR for d in self.documents)

    @property
    def violation_count(self) -> int:
        return sum(len(d.violations) for d in self.documents)

    @property
    def skipped(self) -> list[str]:
        return [d.path for d in self.documents if d.status is DocumentStatus.SKIPPED]

    @property
    def errors(self) -> list[DocumentResult]:
        return [d for d in self.documents if d.status is DocumentStatus.ERROR]
