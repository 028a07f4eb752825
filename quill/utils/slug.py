"""Slug generation utilities."""
from __future__ import annotations

import re


def slugify(text: str) -> str:
    """
    Convert a category name to a URL-friendly slug.

    Lowercases, drops everything except ``a-z``, digits, spaces and hyphens,
    then turns whitespace runs into single hyphens and collapses repeated
    hyphens. ``"Tech & Science!"`` becomes ``"tech-science"``.

    Args:
        text: The text to convert to a slug

    Returns:
        A URL-friendly slug string
    """
    if not text:
        return ""

    # Convert to lowercase
    text = text.lower()

    # Remove all characters other than letters, digits, spaces and hyphens
    text = re.sub(r'[^a-z0-9 -]', '', text)

    # Replace whitespace runs with a hyphen
    text = re.sub(r'\s+', '-', text)

    # Remove multiple consecutive hyphens
    text = re.sub(r'-+', '-', text)

    return text
