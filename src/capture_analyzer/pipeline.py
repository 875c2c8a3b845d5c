"""Analysis pipeline entry points and batch sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .analysis.comparison import CaptureComparator, ComparisonResult
from .analysis.report import CaptureReport, build_report
from .analysis.statistics import extract_statistics
from .config.types import Config, default_config
from .data.normalizer import normalize
from .data.structures import CaptureStatistics, PacketRecord, ParseError
from .errors import CaptureAnalysisError, CaptureAnalyzerError, TooManyCapturesError
from .utils.io import read_capture_text
from .utils.logging import get_logger
from .utils.progress import progress

logger = get_logger(__name__)


def compare(reports: Sequence[CaptureReport], config: Config | None = None) -> ComparisonResult:
    """Compare two or more capture reports."""

    config = config or default_config()
    return CaptureComparator(config.comparison).compare(reports)


@dataclass(frozen=True)
class AnalyzedCapture:
    """Everything derived from one capture export."""

    file_name: str
    packets: Tuple[PacketRecord, ...]
    parse_errors: Tuple[ParseError, ...]
    statistics: CaptureStatistics
    report: CaptureReport


@dataclass
class AnalysisSession:
    """Captures analyzed together, plus their comparison when there are several."""

    captures: List[AnalyzedCapture] = field(default_factory=list)
    comparison: Optional[ComparisonResult] = None

    @property
    def reports(self) -> List[CaptureReport]:
        return [capture.report for capture in self.captures]

    def to_dict(self) -> Dict[str, object]:
        return {
            "captures": [capture.report.to_dict() for capture in self.captures],
            "parse_errors": {
                capture.file_name: [error.to_dict() for error in capture.parse_errors] for capture in self.captures
            },
            "comparison": self.comparison.to_dict() if self.comparison is not None else None,
        }


class AnalysisPipeline:
    """Run normalization and every analyzer, one capture at a time."""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or default_config()

    def analyze_text(self, raw_text: str, file_name: str = "capture") -> AnalyzedCapture:
        packets, errors = normalize(raw_text)
        statistics = extract_statistics(packets)
        report = build_report(packets, file_name=file_name, config=self.config, statistics=statistics)
        logger.info(
            "capture_analyzed",
            file=file_name,
            packets=statistics.total_packets,
            parse_errors=len(errors),
            connections=len(report.connections),
            findings=len(report.security),
        )
        return AnalyzedCapture(
            file_name=file_name,
            packets=tuple(packets),
            parse_errors=tuple(errors),
            statistics=statistics,
            report=report,
        )

    def analyze_file(self, path: Path, index: Optional[int] = None) -> AnalyzedCapture:
        """Read and analyze one file; any failure is reported against its name."""

        path = Path(path)
        try:
            text = read_capture_text(path)
            return self.analyze_text(text, file_name=path.name)
        except CaptureAnalyzerError as exc:
            logger.error("capture_failed", file=path.name, reason=str(exc))
            raise CaptureAnalysisError(path.name, str(exc), index=index) from exc
        except Exception as exc:
            logger.error("capture_failed", file=path.name, reason=repr(exc))
            raise CaptureAnalysisError(path.name, f"{type(exc).__name__}: {exc}", index=index) from exc

    def analyze_files(self, paths: Iterable[Path], show_progress: bool = False) -> AnalysisSession:
        """Analyze captures sequentially, stopping at the first failure.

        The raised :class:`CaptureAnalysisError` carries the captures that were
        analyzed before the failing one in ``completed``.
        """

        paths = [Path(p) for p in paths]
        limit = self.config.session.max_files
        if len(paths) > limit:
            raise TooManyCapturesError(len(paths), limit)
        session = AnalysisSession()
        for index, path in enumerate(progress(paths, desc="Analyzing", disable=not show_progress)):
            try:
                session.captures.append(self.analyze_file(path, index=index))
            except CaptureAnalysisError as exc:
                exc.completed = tuple(session.captures)
                raise
        if len(session.captures) > 1:
            session.comparison = compare(session.reports, self.config)
        return session


__all__ = [
    "AnalysisPipeline",
    "AnalysisSession",
    "AnalyzedCapture",
    "build_report",
    "compare",
    "extract_statistics",
    "normalize",
]
