"""Use Case: Lint Corpus - lint many documents in parallel with cooperative cancellation."""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from markdown_style_linter.domain.document import parse
from markdown_style_linter.domain.entities import CorpusResult, DocumentResult, DocumentStatus
from markdown_style_linter.domain.protocols import DocumentSourceProtocol, TelemetryPort
from markdown_style_linter.domain.rules import EffectiveConfig
from markdown_style_linter.use_cases.lint_document import RuleEngine


class LintCorpusUseCase:
    """Orchestrate reading, parsing and linting of a list of documents."""

    def __init__(
        self,
        engine: RuleEngine,
        source: DocumentSourceProtocol,
        telemetry: TelemetryPort,
        front_matter: bool = False,
    ) -> None:
        self.engine = engine
        self.source = source
        self.telemetry = telemetry
        self.front_matter = front_matter

    def execute(
        self,
        paths: Sequence[str],
        config: EffectiveConfig,
        jobs: int = 1,
        cancel_event: Optional[threading.Event] = None,
    ) -> CorpusResult:
        """
        Lint ``paths`` and return one DocumentResult per path, in input order.

        Documents share only the read-only registry and ``config``. When
        ``cancel_event`` is set, documents that have not started yet are
        reported as skipped; documents already running finish normally.
        """
        cancel = cancel_event or threading.Event()
        self.telemetry.step(f"Linting {len(paths)} document(s) with {max(jobs, 1)} worker(s)")
        if jobs <= 1:
            results = [self._lint_one(path, config, cancel) for path in paths]
        else:
            with ThreadPoolExecutor(max_workers=jobs) as pool:
                futures = [pool.submit(self._lint_one, path, config, cancel) for path in paths]
                try:
                    results = [future.result() for future in futures]
                except KeyboardInterrupt:
                    cancel.set()
                    self.telemetry.warning("Interrupted: finishing documents in progress")
                    results = [future.result() for future in futures]
        return CorpusResult(documents=tuple(results), cancelled=cancel.is_set())

    def _lint_one(self, path: str, config: EffectiveConfig, cancel: threading.Event) -> DocumentResult:
        if cancel.is_set():
            return DocumentResult(path, status=DocumentStatus.SKIPPED)
        try:
            text = self.source.read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            self.telemetry.debug(f"Cannot read {path}: {exc}")
            return DocumentResult(path, status=DocumentStatus.ERROR, error=str(exc))
        doc = parse(text, front_matter=self.front_matter)
        violations = self.engine.lint(doc, config)
        self.telemetry.debug(f"{path}: {len(violations)} violation(s)")
        return DocumentResult(path, violations=tuple(violations))
