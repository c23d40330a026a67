"""Shared helpers for word normalization."""

from __future__ import annotations


def clean_word(text: str) -> str:
    """Return ``text`` reduced to its letters, uppercased.

    Non-Latin alphabets are kept as-is; the game vocabulary is not restricted
    to ASCII.
    """

    if not text:
        return ""
    return "".join(char for char in text if char.isalpha()).upper()


__all__ = ["clean_word"]
