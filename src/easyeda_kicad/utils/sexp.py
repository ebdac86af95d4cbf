"""S-expression helpers for the KiCad text this package writes."""

from __future__ import annotations


def quote(text: str) -> str:
    """Quote a string atom, escaping backslashes, quotes and newlines."""
    escaped = (
        str(text)
        .replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
    )
    return f'"{escaped}"'


def is_balanced(content: str) -> bool:
    """Check that parentheses outside quoted strings are balanced."""
    depth = 0
    i = 0
    while i < len(content):
        ch = content[i]
        if ch == '"':
            # Skip quoted strings (handle escaped quotes)
            i += 1
            while i < len(content):
                if content[i] == "\\" and i + 1 < len(content):
                    i += 2
                    continue
                if content[i] == '"':
                    break
                i += 1
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                return False
        i += 1
    return depth == 0
