import re
from pathlib import Path

_LANGUAGE_ALIASES = {
    "javascript": "javascript",
    "js": "javascript",
    "jsx": "javascript",
    "ts": "tsx",
    "tsx": "tsx",
    "typescript": "tsx",
}

# Both grammars parse JSX; TypeScript sources always use the tsx grammar.
_EXTENSION_LANGUAGE_MAP = {
    ".cjs": "javascript",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cts": "tsx",
    ".mts": "tsx",
    ".ts": "tsx",
    ".tsx": "tsx",
}

_TYPESCRIPT_EXTENSIONS = frozenset({".ts", ".tsx", ".mts", ".cts"})

_SUPPORTED_LANGUAGES = set(_LANGUAGE_ALIASES.values())

_COMPONENT_FILE_PATTERN = re.compile(r"\.(tsx?|jsx?)$")

_NON_IDENTIFIER_CHARS = re.compile(r"[^0-9A-Za-z_$]+")


def normalize_language(language: str) -> str:
    normalized = language.strip().lower()
    resolved = _LANGUAGE_ALIASES.get(normalized, normalized)
    if resolved not in _SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language '{language}'. Supported: {sorted(_SUPPORTED_LANGUAGES)}")
    return resolved


def detect_language_from_path(file_path: Path) -> str:
    suffix = file_path.suffix.lower()
    if suffix in _EXTENSION_LANGUAGE_MAP:
        return _EXTENSION_LANGUAGE_MAP[suffix]
    raise ValueError(f"Unsupported file extension: {suffix}")


def resolve_language(language: str | None, file_path: Path | None) -> str:
    if language:
        return normalize_language(language)
    if file_path:
        return detect_language_from_path(file_path)
    raise ValueError("Language must be provided when no file path is available.")


def is_typescript_path(file_path: Path) -> bool:
    return file_path.suffix.lower() in _TYPESCRIPT_EXTENSIONS


def is_component_file(filename: str) -> bool:
    """Return True for ``.js``, ``.jsx``, ``.ts`` and ``.tsx`` file names."""
    return _COMPONENT_FILE_PATTERN.search(filename) is not None


def sibling_path(file_path: Path, tag: str) -> Path:
    """``Counter.tsx`` with tag ``client`` becomes ``Counter.client.tsx`` in the same directory."""
    return file_path.with_name(f"{file_path.stem}.{tag}{file_path.suffix}")


def component_identifier(file_path: Path) -> str:
    """Derive a PascalCase identifier from a file's base name."""
    parts = [part for part in _NON_IDENTIFIER_CHARS.split(file_path.stem) if part]
    identifier = "".join(part[0].upper() + part[1:] for part in parts)
    if not identifier:
        return "Component"
    if identifier[0].isdigit():
        return f"_{identifier}"
    return identifier
