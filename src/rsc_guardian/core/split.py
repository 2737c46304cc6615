import logging
import tempfile
from pathlib import Path

from rsc_guardian.config import get_default_language
from rsc_guardian.core.ast import parse_source, read_source
from rsc_guardian.core.classify import classify
from rsc_guardian.core.generate import generate_client, generate_server
from rsc_guardian.core.languages import resolve_language, sibling_path
from rsc_guardian.core.partition import partition_module
from rsc_guardian.models import SplitResult

logger = logging.getLogger(__name__)


def split_source(source_bytes: bytes, source_path: str | Path, language: str) -> SplitResult:
    """Split a module into server and client texts, or signal that no split is needed."""
    path = Path(source_path)
    tree = parse_source(source_bytes, language)
    classification = classify(tree, str(path))
    partition, tainted = partition_module(tree, classification.is_tainted)

    if not tainted:
        logger.info("No client-only features in %s", path)
        return SplitResult(needs_split=False, source_path=str(path))

    return SplitResult(
        needs_split=True,
        source_path=str(path),
        server_path=str(sibling_path(path, "server")),
        client_path=str(sibling_path(path, "client")),
        server_text=generate_server(source_bytes, path, partition),
        client_text=generate_client(source_bytes, path, partition),
    )


def _write_whole(path: Path, text: str) -> None:
    # Write to a temporary sibling first so the target is replaced in one step.
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", newline="", dir=path.parent, prefix=f".{path.name}.", delete=False
    ) as temp_file:
        temp_file.write(text)
        temp_path = Path(temp_file.name)
    try:
        temp_path.replace(path)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise


def write_split(result: SplitResult) -> SplitResult:
    if not result.needs_split:
        return result
    assert result.server_path is not None and result.server_text is not None
    assert result.client_path is not None and result.client_text is not None

    _write_whole(Path(result.server_path), result.server_text)
    _write_whole(Path(result.client_path), result.client_text)
    logger.info("Wrote %s and %s", result.server_path, result.client_path)
    return result.model_copy(update={"written": True})


def split_file(path: str | Path, apply: bool = False, language: str | None = None) -> SplitResult:
    """Split a component file; files are only written when ``apply`` is set."""
    absolute_path, source_bytes = read_source(path)
    resolved_language = resolve_language(language or get_default_language(), absolute_path)
    result = split_source(source_bytes, absolute_path, resolved_language)
    if apply:
        result = write_split(result)
    return result
