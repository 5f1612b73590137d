import re
from datetime import date
from pathlib import PurePath

from docpipe.documents.models import ClassificationResult

_NON_ALNUM_SPACE = re.compile(r"[^a-zA-Z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def sanitize_customer_name(name: str) -> str:
    """'Tan Ah-Kow ' -> 'TAN_AHKOW'."""
    cleaned = _NON_ALNUM_SPACE.sub("", name).strip()
    return _WHITESPACE.sub("_", cleaned).upper()


def split_filename(customer_name: str, document_type: str) -> str:
    """Output name for a split document: CUSTOMER_NAME_documenttype.pdf"""
    safe_name = sanitize_customer_name(customer_name) or "UNKNOWN"
    return f"{safe_name}_{document_type}.pdf"


def suggested_filename(
    result: ClassificationResult,
    customer_name: str,
    original_filename: str,
    today: date | None = None,
) -> str:
    """Filing name for a classified file: Name_doc-type_YYYY-MM-DD.ext"""
    extension = PurePath(original_filename).suffix
    name = customer_name or result.customer_name or "Unknown"
    safe_name = _WHITESPACE.sub("_", _NON_ALNUM_SPACE.sub("", name).strip()) or "Unknown"
    doc_type = result.document_type.replace("_", "-")
    stamp = (today or date.today()).isoformat()
    return f"{safe_name}_{doc_type}_{stamp}{extension}"
