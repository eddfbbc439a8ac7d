"""
Card template token substitution.

Templates are HTML fragments containing ``{{field}}`` tokens. Rendering
replaces every known token with the HTML-escaped field value and leaves
unknown tokens untouched so typos stay visible in the preview.
"""

import html
import re
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

TOKEN_PATTERN = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


def find_tokens(template_html: str) -> List[str]:
    """
    List the distinct tokens used by a template, in order of first use.

    Args:
        template_html: Template HTML

    Returns:
        Token names without braces
    """
    seen: Dict[str, None] = {}
    for match in TOKEN_PATTERN.finditer(template_html):
        seen.setdefault(match.group(1), None)
    return list(seen)


def render_template(template_html: str, data: Mapping[str, Any]) -> str:
    """
    Substitute ``{{field}}`` tokens with values from ``data``.

    Args:
        template_html: Template HTML
        data: Field values; ``None`` renders as an empty string

    Returns:
        Rendered HTML fragment
    """

    def replace(match: "re.Match[str]") -> str:
        key = match.group(1)
        if key not in data:
            return match.group(0)
        value = data[key]
        return html.escape("" if value is None else str(value))

    return TOKEN_PATTERN.sub(replace, template_html)


def build_document(body_html: str, css: Optional[str] = None, title: str = "QSL Card") -> str:
    """Wrap a rendered fragment into a standalone HTML document."""
    return (
        "<!DOCTYPE html>\n"
        '<html><head><meta charset="utf-8">'
        f"<title>{html.escape(title)}</title>"
        f"<style>{css or ''}</style>"
        f"</head><body>{body_html}</body></html>"
    )


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def card_data(log: Any, user: Any) -> Dict[str, str]:
    """
    Build the template fields for one contact.

    Station details missing from the log fall back to the operator profile.

    Args:
        log: QslLog entry
        user: Operator who owns the log

    Returns:
        Mapping of every available field to a string value
    """
    return {
        "contactCall": _text(log.contact_call),
        "contactName": _text(log.contact_name),
        "myCall": _text(user.callsign or user.username),
        "myName": _text(user.name),
        "frequency": _text(log.frequency),
        "mode": _text(log.mode),
        "date": _text(log.date),
        "time": _text(log.time),
        "rstSent": _text(log.rst_sent),
        "rstReceived": _text(log.rst_received),
        "band": _text(log.band),
        "power": _text(log.power or user.power),
        "antenna": _text(log.antenna or user.antenna),
        "qth": _text(log.qth or user.qth),
        "locator": _text(log.locator or user.locator),
        "notes": _text(log.notes),
    }
