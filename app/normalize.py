"""
Core URL normalization logic.

Responsibilities:
- decide, per href/src value, whether and how it is rewritten
- walk a parsed document and apply the rewrite in place
- strip responsive image attributes
- report every rewrite plus a step-by-step debug trace
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional

from bs4 import BeautifulSoup
from charset_normalizer import from_bytes

from .logger import get_logger
from .models import NormalizationOptions, NormalizeResponse
from .rules import (
    ASSET_MARKERS,
    DOCUMENTS_MARKER,
    EXCEPTED_HOSTS,
    INTERNAL_DOMAIN_SUFFIX,
    RELATIVIZE_PATTERN,
    STRIPPED_ATTRIBUTES,
    TARGET_PATH_TEMPLATE,
)
from .segments import (
    adjust_file_name,
    extract_file_name,
    get_extension,
    normalize_special_chars,
    remove_url_params,
)
from .trace import ProcessingContext

logger = get_logger("normalize")

_RELATIVIZE_RE = re.compile(RELATIVIZE_PATTERN)
_FALLBACK_SEPARATOR_RE = re.compile(r"[+\s]")

URL_ATTRIBUTES = ("href", "src")


def _split_file_name(url: str, ctx: ProcessingContext) -> tuple[str, str] | None:
    clean_url = remove_url_params(url, ctx)
    file_name = extract_file_name(clean_url, ctx)
    if not file_name:
        return None

    extension = get_extension(file_name, ctx)
    return file_name[: file_name.rindex(".")], extension


def _target_path(secretaria: str, name: str, extension: str) -> str:
    return TARGET_PATH_TEMPLATE.format(secretaria=secretaria, name=name, extension=extension)


def normalize_url(
    original_url: str,
    options: NormalizationOptions,
    ctx: Optional[ProcessingContext] = None,
) -> str:
    """
    Rewrite one href/src value. First matching rule wins:

    1. leave excepted hosts alone
    2. relativize internal absolute URLs (when enabled)
    3. /documents/ links -> /documents/d/<secretaria>/<slug><-ext>
    4. wp-content / wp-conteudo assets -> same target shape
    5. anything else is returned unchanged
    """
    if ctx is None:
        ctx = ProcessingContext()

    ctx.debug("normalizeUrl-input", original_url)

    # Excepted hosts are never relativized or renamed.
    if any(host in original_url for host in EXCEPTED_HOSTS):
        return ctx.debug("normalizeUrl-excepted", original_url)

    if (
        options.relativize_links
        and original_url.startswith("http")
        and INTERNAL_DOMAIN_SUFFIX in original_url
    ):
        match = _RELATIVIZE_RE.search(original_url)
        if match and match.group(1):
            return ctx.debug("normalizeUrl-relatived", match.group(1))

    if DOCUMENTS_MARKER in original_url:
        parts = _split_file_name(original_url, ctx)
        if parts:
            name, extension = parts
            if options.normalize_special_chars:
                name = normalize_special_chars(name, ctx)
            else:
                name = _FALLBACK_SEPARATOR_RE.sub("-", name).lower()

            name = adjust_file_name(name.replace(".", "-"), ctx)
            return ctx.debug("normalizeUrl-final", _target_path(options.secretaria, name, extension))

    if any(marker in original_url for marker in ASSET_MARKERS):
        parts = _split_file_name(original_url, ctx)
        if parts:
            name, extension = parts
            # Unlike documents, the plain path keeps case and whitespace.
            if options.normalize_special_chars:
                name = normalize_special_chars(name, ctx)

            name = adjust_file_name(name.replace(".", "-"), ctx)
            return ctx.debug("normalizeUrl-wp", _target_path(options.secretaria, name, extension))

    return ctx.debug("normalizeUrl-unchanged", original_url)


def process_html(html: str, options: NormalizationOptions) -> NormalizeResponse:
    """
    Rewrite every href/src in a document and drop srcset/sizes.

    Returns the re-serialized markup, the debug trace, the number of
    rewritten URLs and the ordered list of rewrites.
    """
    ctx = ProcessingContext()

    if not html:
        return NormalizeResponse(processed_html="")

    soup = BeautifulSoup(html, "html.parser")

    elements = soup.find_all(lambda tag: any(tag.has_attr(a) for a in URL_ATTRIBUTES))
    for element in elements:
        present = [a for a in URL_ATTRIBUTES if element.has_attr(a)]
        original_url = element.get(present[0])
        if not original_url:
            continue

        new_url = normalize_url(original_url, options, ctx)
        if new_url != original_url:
            ctx.record(original_url, new_url)
            for attr in present:
                if element.get(attr) == original_url:
                    element[attr] = new_url

    for attr in STRIPPED_ATTRIBUTES:
        for element in soup.find_all(attrs={attr: True}):
            del element[attr]

    logger.info(
        "Processed document for %s: %d URL(s) normalized",
        options.secretaria,
        ctx.urls_normalized,
    )

    return NormalizeResponse(
        processed_html=str(soup),
        debug_output=ctx.debug_output if options.debug else "",
        urls_normalized=ctx.urls_normalized,
        urls_processed=ctx.records,
    )


def decode_html_bytes(raw: bytes) -> tuple[str, Dict[str, Any]]:
    """
    Decode an uploaded HTML file.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is consumed rather than kept in the text.
    - If decode fails, fall back to UTF-8 with replacement characters.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(b"\xef\xbb\xbf") and (decode_used.lower().replace("-", "_") in ("utf_8", "utf8")):
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        text = raw.decode("utf-8", errors="replace")
        decode_used = "utf-8"
        decode_fallback = True
        logger.warning("Could not decode upload as %s, fell back to utf-8", detected)

    return text, {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }


def process_html_bytes(raw: bytes, options: NormalizationOptions) -> NormalizeResponse:
    text, encoding = decode_html_bytes(raw)
    result = process_html(text, options)
    return result.model_copy(update={"encoding": encoding["decode_used"]})
