# smart_editor/text/__init__.py
# text clean-up and recognition helpers used by the codec and the session

from .normalizer import normalize_run, normalize_spaces, neutralize_placeholders
from .links import URL_RE, extract_domain, is_url, make_link

__all__ = [
    "normalize_run",
    "normalize_spaces",
    "neutralize_placeholders",
    "URL_RE",
    "extract_domain",
    "is_url",
    "make_link",
]
