"""
Turning uploaded documents into plain text.

PDFs are read with pypdf, one page after another. HTML e-mail bodies are
reduced to their visible text, one text node per line, because the
extractors work line by line. Anything else is decoded as UTF-8.
"""

import re
import sys
import logging
from html import unescape
from html.parser import HTMLParser
from io import BytesIO
from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PyPdfError

logger = logging.getLogger(__name__)


class DocumentError(Exception):
    """Raised when a document cannot be turned into text."""


def _clean_spaces(text):
    return text.replace("\u202f", " ").replace("\xa0", " ")


def looks_like_pdf(data):
    if not data:
        return False
    head = data.lstrip()
    if head.startswith(b"\xef\xbb\xbf"):
        head = head[3:].lstrip()
    return head.startswith(b"%PDF")


def _looks_like_html(text):
    head = text.lstrip()[:2000].lower()
    if head.startswith("<!doctype html") or head.startswith("<html"):
        return True
    return bool(re.search(r'<(html|body|div|p|br|table|tr|td|span)(\s|>)', head))


# ============================================================================
# PDF TEXT EXTRACTION (pypdf)
# ============================================================================

def extract_pdf_text(data):
    """Text of every page, pages joined with newlines.

    Raises:
        DocumentError: if pypdf cannot read the file
    """
    try:
        reader = PdfReader(BytesIO(data))
        pages = [_clean_spaces(page.extract_text() or "") for page in reader.pages]
    except (PyPdfError, ValueError, KeyError, TypeError) as e:
        raise DocumentError(f"Could not read PDF: {e}") from e

    logger.debug(f"Read {len(pages)} PDF page(s)")
    return '\n'.join(pages)


# ============================================================================
# HTML TEXT EXTRACTION (using native Python html.parser)
# ============================================================================

class _TextExtractor(HTMLParser):
    """Extract visible text from HTML, one text node per line."""

    SKIP_TAGS = frozenset({'script', 'style', 'head', 'meta', 'link', 'noscript', 'svg', 'path'})

    def __init__(self):
        super().__init__()
        self.text_parts = []
        self.skip_depth = 0

    def handle_starttag(self, tag, attrs):
        if tag.lower() in self.SKIP_TAGS:
            self.skip_depth += 1

    def handle_endtag(self, tag):
        if tag.lower() in self.SKIP_TAGS and self.skip_depth > 0:
            self.skip_depth -= 1

    def handle_data(self, data):
        if self.skip_depth == 0:
            text = re.sub(r'[ \t]+', ' ', data).strip()
            if text:
                self.text_parts.append(text)

    def get_text(self):
        return '\n'.join(self.text_parts)


def html_to_text(html_text):
    """Visible text of an HTML document, one text node per line."""
    if not html_text:
        return ""
    parser = _TextExtractor()
    parser.feed(html_text)
    parser.close()
    return _clean_spaces(unescape(parser.get_text()))


# ============================================================================
# ENTRY POINTS
# ============================================================================

def extract_text_from_document(data):
    """Plain text of a PDF, HTML or text document given as bytes.

    Raises:
        DocumentError: if the bytes are a PDF that cannot be read
    """
    if looks_like_pdf(data):
        return extract_pdf_text(data)

    text = data.decode('utf-8', errors='replace')
    if text.startswith('\ufeff'):
        text = text[1:]
    if _looks_like_html(text):
        return html_to_text(text)
    return _clean_spaces(text)


def read_document(path):
    """Read a file (or "-" for stdin) and return its text.

    Raises:
        DocumentError: if the file cannot be read or is an unreadable PDF
    """
    if str(path) == '-':
        return extract_text_from_document(sys.stdin.buffer.read())

    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise DocumentError(f"Could not read {path}: {e}") from e
    return extract_text_from_document(data)
