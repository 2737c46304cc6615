import difflib


def render_addition_diff(path: str, text: str) -> str:
    """Render ``text`` as a unified diff that creates ``path`` from nothing."""
    lines = text.splitlines(keepends=True)
    if lines and not lines[-1].endswith("\n"):
        lines[-1] += "\n"
    return "".join(difflib.unified_diff([], lines, fromfile="/dev/null", tofile=path))
