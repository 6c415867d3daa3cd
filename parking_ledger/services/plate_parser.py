# parking_ledger/services/plate_parser.py
"""
License-plate input normalizer.

Plates follow LLL-DD[X]: three letters, a hyphen, two digits and an optional
final character. The final character is a digit on car plates (ABC-123) and
a letter on motorcycle plates (ABC-12D); the bare ABC-12 form is the older
motorcycle plate.

apply_keystroke() runs on every change of the input field. It must survive
forward typing, backspacing and pasting, and always returns a legal prefix of
the grammar, never longer than 7 characters.
"""

import re

PLATE_MAX_LENGTH = 7
LETTERS = 3
DIGITS = 2

PLATE_PATTERN = re.compile(r"^[A-Z]{3}-\d{2}[A-Z0-9]?$")
PLATE_PREFIX_PATTERN = re.compile(r"^(?:[A-Z]{0,3}|[A-Z]{3}-\d{0,2}|[A-Z]{3}-\d{2}[A-Z0-9])$")


def _accepts(position: int, ch: str) -> bool:
    """Whether ch is legal at this index of the hyphen-less plate body."""
    if position < LETTERS:
        return ch.isalpha()
    if position < LETTERS + DIGITS:
        return ch.isdigit()
    return position == LETTERS + DIGITS      # final char: digit (car) or letter (moto)


def apply_keystroke(previous: str, new: str) -> str:
    """
    Normalize the field after the operator changed it from `previous` to `new`.
    Characters outside [A-Za-z0-9] are stripped, letters upper-cased, and
    input stops at the first character the grammar rejects.
    """
    body = []
    for ch in new:
        if not (ch.isascii() and ch.isalnum()):
            continue
        ch = ch.upper()
        if not _accepts(len(body), ch):
            break
        body.append(ch)

    letters, rest = "".join(body[:LETTERS]), "".join(body[LETTERS:])
    if rest:
        return f"{letters}-{rest}"

    if len(letters) == LETTERS:
        typing_forward = len(new) > len(previous)
        # Keep a hyphen the operator left in place while deleting
        hyphen_kept = len(new) > LETTERS and new[LETTERS] == "-"
        if typing_forward or hyphen_kept:
            return letters + "-"
    return letters


def normalize_plate(raw: str) -> str:
    """One-shot normalization of a whole string, e.g. 'abc 123' -> 'ABC-123'."""
    return apply_keystroke("", raw or "")


def is_plate_prefix(text: str) -> bool:
    return len(text) <= PLATE_MAX_LENGTH and bool(PLATE_PREFIX_PATTERN.match(text))


def is_complete_plate(text: str) -> bool:
    return bool(PLATE_PATTERN.match(text or ""))
