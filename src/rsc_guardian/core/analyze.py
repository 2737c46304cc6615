import logging
from pathlib import Path

from rsc_guardian.config import get_default_language
from rsc_guardian.core.ast import parse_source, read_source
from rsc_guardian.core.classify import classify
from rsc_guardian.core.languages import resolve_language
from rsc_guardian.models import AnalysisResult

logger = logging.getLogger(__name__)


def analyze_source(source_bytes: bytes, language: str, path: str | None = None) -> AnalysisResult:
    tree = parse_source(source_bytes, language)
    return classify(tree, path).result


def analyze_file(path: str | Path, language: str | None = None) -> AnalysisResult:
    """Report the client-only features used by a component file."""
    absolute_path, source_bytes = read_source(path)
    resolved_language = resolve_language(language or get_default_language(), absolute_path)
    logger.info("Analyzing %s (language: %s)", absolute_path, resolved_language)
    return analyze_source(source_bytes, resolved_language, str(absolute_path))
