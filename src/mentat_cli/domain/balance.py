"""Delimiter balance for query and transaction bodies.

This is not a reader for the structured notation. It only tracks enough
lexical state (brackets, string literals, character literals, line
comments) to tell the shell whether the text typed so far could be a
finished form. Malformed input is reported as balanced so that it
reaches the engine, which owns the real parser and its diagnostics.
"""

from __future__ import annotations

_OPENERS: dict[str, str] = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())


def is_balanced(text: str) -> bool:
    """Return True when *text* holds at least one form and no open delimiters."""
    stack: list[str] = []
    seen_form = False
    in_string = False
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        if in_string:
            if ch == "\\":
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == ";":
            newline = text.find("\n", i)
            if newline == -1:
                break
            i = newline + 1
            continue
        if ch.isspace() or ch == ",":
            i += 1
            continue

        seen_form = True
        if ch == '"':
            in_string = True
        elif ch == "\\":
            # Character literal such as \( or \newline; the next char is data.
            i += 1
        elif ch in _OPENERS:
            stack.append(_OPENERS[ch])
        elif ch in _CLOSERS:
            if not stack or stack.pop() != ch:
                return True
        i += 1

    return seen_form and not in_string and not stack
