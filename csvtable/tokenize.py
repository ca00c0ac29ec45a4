"""
Byte-to-rows tokenization.

Responsibilities:
- extension check on the uploaded filename
- encoding detection (charset-normalizer)
- delimiter detection
- row splitting with no implicit header and blank lines skipped
"""

from __future__ import annotations

import csv
import io
import logging
from typing import List, Tuple

from charset_normalizer import from_bytes

from . import rules
from .errors import InvalidExtension, ParserFailure, TokenizerFailure

logger = logging.getLogger(__name__)


def check_filename(filename: str | None) -> None:
    if not filename or not filename.endswith(rules.ALLOWED_EXTENSION):
        logger.warning("rejected upload with filename %r", filename)
        raise InvalidExtension()


def decode_bytes(raw: bytes) -> Tuple[str, str]:
    """
    Decode uploaded bytes to text.

    Rules:
    - Strict UTF-8 first; a UTF-8 BOM is dropped rather than surfacing as part of the first cell.
    - Otherwise detect encoding best-effort via charset-normalizer.
    - With no detection result the upload is not text.
    - Text that still holds NUL characters is not CSV.
    """
    if not raw:
        return "", "utf-8"

    try:
        text = raw.decode("utf-8-sig")
        decode_used = "utf-8-sig" if raw.startswith(b"\xef\xbb\xbf") else "utf-8"
    except UnicodeDecodeError:
        match = from_bytes(raw).best()
        if match is None:
            logger.warning("could not detect an encoding for upload")
            raise TokenizerFailure()
        decode_used = match.encoding
        try:
            text = raw.decode(decode_used)
        except (UnicodeDecodeError, LookupError) as exc:
            logger.warning("could not decode upload as %s: %s", decode_used, exc)
            raise TokenizerFailure() from exc

    if "\x00" in text:
        logger.warning("decoded upload contains NUL characters")
        raise TokenizerFailure()

    return text, decode_used


def sniff_delimiter(text: str) -> str:
    sample = text[: rules.SNIFF_SAMPLE_SIZE]
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=rules.CANDIDATE_DELIMITERS)
    except csv.Error:
        return ","
    return dialect.delimiter


def tokenize_csv(raw: bytes) -> List[List[str]]:
    text, encoding = decode_bytes(raw)
    delimiter = sniff_delimiter(text)
    logger.debug("tokenizing upload: encoding=%s delimiter=%r", encoding, delimiter)

    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, strict=True)
    try:
        # csv.reader yields [] for a blank line
        return [row for row in reader if row]
    except csv.Error as exc:
        logger.warning("csv reader failed at line %d: %s", reader.line_num, exc)
        raise ParserFailure(str(exc)) from exc
