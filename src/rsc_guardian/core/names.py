"""Name predicates that decide what counts as a client-only feature.

Shared by the classifier and the lint rule so both always agree.
"""

CLIENT_DIRECTIVE = "use client"

BROWSER_GLOBALS: frozenset[str] = frozenset(
    {
        "window",
        "document",
        "localStorage",
        "sessionStorage",
        "navigator",
        "location",
        "history",
        "alert",
        "confirm",
        "prompt",
    }
)

# Import sources that count as the UI framework's root/runtime entry point.
FRAMEWORK_MODULES: frozenset[str] = frozenset({"react", "react/jsx-runtime"})

FRAMEWORK_DEFAULT_IMPORT = "import React from 'react';"


def _is_upper_at(name: str, index: int) -> bool:
    if len(name) <= index:
        return False
    char = name[index]
    return char == char.upper()


def is_hook(name: str) -> bool:
    """``useState`` and ``useEffect`` are hooks; ``use``, ``user`` and ``usex`` are not."""
    return name.startswith("use") and _is_upper_at(name, 3)


def is_event_handler(name: str) -> bool:
    """``onClick`` and ``onChange`` are handlers; ``on`` and ``once`` are not."""
    return name.startswith("on") and _is_upper_at(name, 2)


def is_browser_global(name: str) -> bool:
    return name in BROWSER_GLOBALS


def is_framework_module(source: str | None) -> bool:
    return source in FRAMEWORK_MODULES
