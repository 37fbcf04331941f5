"""Quote-aware character scanning and bracket matching on a single line.

Every function here is pure and only looks at the text it is given. Rules must
go through :func:`classify` (or :func:`string_mask`) instead of tracking quotes
on their own, so that string and character literals are handled the same way
everywhere.
"""

from __future__ import annotations

from collections.abc import Iterator

BLANKS = " \t"
BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}"}
_OPENERS = {closer: opener for opener, closer in BRACKET_PAIRS.items()}


def is_blank(char: str) -> bool:
    """True for a single space or tab, false for anything else including ``""``."""
    return char != "" and char in BLANKS


def pos_head(text: str) -> int:
    """Index of the first character that is not a space or a tab."""
    for index, char in enumerate(text):
        if char not in BLANKS:
            return index
    return len(text)


def is_comment(text: str) -> bool:
    head = pos_head(text)
    return head < len(text) and text[head] == "/"


def classify(text: str) -> Iterator[tuple[int, str, bool]]:
    """Yield ``(index, char, in_string)`` for each character of ``text``.

    A quote toggles its own flag only when the other kind of quote is closed and
    the previous character is not a backslash. The delimiting quotes are
    reported as inside the literal. An unterminated literal leaves the rest of
    the line inside the string.
    """
    in_single = False
    in_double = False
    previous = ""
    for index, char in enumerate(text):
        toggled = False
        if previous != "\\":
            if char == "'" and not in_double:
                in_single = not in_single
                toggled = True
            elif char == '"' and not in_single:
                in_double = not in_double
                toggled = True
        yield index, char, toggled or in_single or in_double
        previous = char


def string_mask(text: str) -> list[bool]:
    """Per-index flags, true where the character belongs to a literal."""
    return [in_string for _, _, in_string in classify(text)]


def match_forward(text: str, from_index: int) -> int:
    """Index of the delimiter closing the one at ``from_index``.

    Returns ``from_index`` when the character is not an opener, sits inside a
    literal, or is not closed on this line.
    """
    if not 0 <= from_index < len(text):
        return from_index
    opener = text[from_index]
    closer = BRACKET_PAIRS.get(opener)
    if closer is None:
        return from_index
    mask = string_mask(text)
    if mask[from_index]:
        return from_index

    depth = 0
    for index in range(from_index, len(text)):
        if mask[index]:
            continue
        char = text[index]
        if char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return index
    return from_index


def match_backward(text: str, from_index: int) -> int:
    """Index of the delimiter opening the one at ``from_index``, same sentinel rules."""
    if not 0 <= from_index < len(text):
        return from_index
    closer = text[from_index]
    opener = _OPENERS.get(closer)
    if opener is None:
        return from_index
    mask = string_mask(text)
    if mask[from_index]:
        return from_index

    depth = 0
    for index in range(from_index, -1, -1):
        if mask[index]:
            continue
        char = text[index]
        if char == closer:
            depth += 1
        elif char == opener:
            depth -= 1
            if depth == 0:
                return index
    return from_index


def last_index_outside_strings(text: str, char: str) -> int:
    """Rightmost index of ``char`` outside literals, or ``len(text)``."""
    mask = string_mask(text)
    for index in range(len(text) - 1, -1, -1):
        if text[index] == char and not mask[index]:
            return index
    return len(text)


def code_end(text: str) -> int:
    """Index where a ``//`` or ``/*`` comment starts outside literals, or ``len(text)``."""
    mask = string_mask(text)
    for index in range(len(text) - 1):
        if mask[index] or text[index] != "/":
            continue
        if text[index + 1] in "/*" and not mask[index + 1]:
            return index
    return len(text)
