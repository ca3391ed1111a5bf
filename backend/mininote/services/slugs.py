"""
MiniNote Backend - Note Identifiers
====================================

What:  Slug validation and random note id generation.
Who:   Used by the note routes (validation, redirects) and the Note Store
       (re-validation before any path is built).

Slug grammar:
    ^[A-Za-z0-9_-]{1,64}$

    A slug is used verbatim as a file name inside the note root, so the
    grammar excludes '.', '/', '\\' and anything else that could form a
    path outside it.

Generated ids:
    Drawn from a 27-character alphabet without visually ambiguous
    characters (no 0/1/6/8/i/l/o/u/v), so an id read aloud or copied by
    hand is typed correctly. No uniqueness check is made against existing
    notes: with 5 characters the namespace is 27^5 (about 14.3M) and a
    collision shows an existing note to the new visitor.
"""

import re
import secrets

SLUG_PATTERN = re.compile(r"[A-Za-z0-9_-]{1,64}")

ID_ALPHABET = "234579abcdefghjkmnpqrstwxyz"

DEFAULT_ID_LENGTH = 5


def validate_slug(candidate: str) -> bool:
    """Return True iff `candidate` is a well-formed note slug."""
    if not isinstance(candidate, str):
        return False
    # fullmatch: unlike `$`, does not accept a trailing newline
    return SLUG_PATTERN.fullmatch(candidate) is not None


def generate_id(length: int = DEFAULT_ID_LENGTH) -> str:
    """
    Generate a random note id of exactly `length` characters.

    Each character is chosen independently and uniformly from ID_ALPHABET
    using the `secrets` CSPRNG.

    Raises:
        ValueError: if length is not positive
    """
    if length < 1:
        raise ValueError(f"Id length must be positive, got {length}")
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))
