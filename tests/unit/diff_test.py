"""Unit tests for the addition-only diff renderer."""

from rsc_guardian.core.diff import render_addition_diff


def test_every_line_is_an_addition() -> None:
    diff = render_addition_diff("/app/Counter.server.tsx", "import React from 'react';\n\nexport default 1;\n")

    lines = diff.splitlines()
    assert lines[0] == "--- /dev/null"
    assert lines[1] == "+++ /app/Counter.server.tsx"
    assert lines[2] == "@@ -0,0 +1,3 @@"
    assert lines[3:] == ["+import React from 'react';", "+", "+export default 1;"]


def test_text_without_trailing_newline() -> None:
    diff = render_addition_diff("a.tsx", "x")
    assert diff.endswith("+x\n")


def test_empty_text() -> None:
    assert render_addition_diff("a.tsx", "") == ""
