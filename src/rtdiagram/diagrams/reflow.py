"""Brace-depth indentation for assembled diagram sources.

Emitters build blocks by nesting strings, which leaves leading whitespace in
whatever state the composition produced. Reflow throws that whitespace away
and re-indents every line from brace nesting alone.

Known limitation: the scan is purely character based, so a ``{`` or ``}``
inside a label counts as structure.
"""

from rtdiagram.errors import ReflowError

DEFAULT_INDENT = "\t"


def reflow(code: str, indent: str = DEFAULT_INDENT) -> str:
    """Re-indent a diagram source by brace depth.

    Blank lines are dropped. A line is indented by the smaller of the depth
    after scanning it and the depth after the previous line, so an opening
    line stays at its parent's level and a closing line drops back to it.

    Args:
        code: Raw multi-line text
        indent: One indentation unit

    Returns:
        Re-indented text without leading or trailing blank lines

    Raises:
        ReflowError: If a closing brace has no matching opening brace
    """
    lines = []
    depth = 0
    previous = 0

    for number, raw in enumerate(code.split("\n"), start=1):
        line = raw.strip()
        if not line:
            continue

        for char in line:
            if char == "{":
                depth += 1
            elif char == "}":
                if depth == 0:
                    raise ReflowError(number, line)
                depth -= 1

        lines.append(indent * min(depth, previous) + line)
        previous = depth

    return "\n".join(lines)
