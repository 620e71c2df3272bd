"""
Filename extraction and slug normalization for URL path segments.

Every helper returns a string for any input and writes one trace line to the
optional processing context.
"""

from __future__ import annotations

import re
from typing import Optional

from .rules import SPECIAL_CHAR_REPLACEMENTS
from .trace import ProcessingContext, trace_value

_HYPHEN_RUN_RE = re.compile(r"-{2,}")


def remove_url_params(url: str, ctx: Optional[ProcessingContext] = None) -> str:
    if "?" in url:
        return trace_value(ctx, "removeUrlParams", url[: url.index("?")])
    return trace_value(ctx, "removeUrlParams-noparams", url)


def extract_file_name(url: str, ctx: Optional[ProcessingContext] = None) -> str:
    """Return the last path segment that looks like a file, or ""."""
    for segment in reversed(url.split("/")):
        if "." in segment and "?" not in segment:
            return trace_value(ctx, "extractFileName-result", segment)
    return trace_value(ctx, "extractFileName-fallback", "")


def get_extension(filename: str, ctx: Optional[ProcessingContext] = None) -> str:
    """
    Hyphen-prefixed extension of a filename.

    "report.PDF" -> "-PDF", "noext" -> "".
    """
    if "." in filename:
        ext = filename[filename.rindex(".") :]
        return trace_value(ctx, "getExtension", "-" + ext[1:])
    return trace_value(ctx, "getExtension-noext", "")


def adjust_file_name(name: str, ctx: Optional[ProcessingContext] = None) -> str:
    # Source documents lost "(2)" to a bad encoding round-trip; only a single
    # trailing "2" is restored, nothing else.
    if name.endswith("2"):
        name = name[:-1] + "282-29"
    return trace_value(ctx, "adjustFileName", name)


def normalize_special_chars(text: str, ctx: Optional[ProcessingContext] = None) -> str:
    """
    Collapse percent-encoded accents and symbols into an ASCII slug.

    The input is lower-cased first, so escapes are compared with lower-case
    hex digits. Table entries are applied one after another, never in
    parallel, and runs of hyphens are collapsed at the end.
    """
    normalized = text.lower()
    for pattern, replacement in SPECIAL_CHAR_REPLACEMENTS:
        normalized = normalized.replace(pattern.lower(), replacement)

    normalized = _HYPHEN_RUN_RE.sub("-", normalized)

    return trace_value(ctx, "normalizeSpecialChars", normalized)
