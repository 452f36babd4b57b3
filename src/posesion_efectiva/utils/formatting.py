"""
Formatting helpers for the values written onto the form.

All helpers are total: malformed input degrades to a passthrough string,
an empty string or zero, never to an exception.
"""

import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_RUT_NOISE = re.compile(r"[^0-9Kk]")

PRESUNCION_FACTOR = Decimal("0.20")

# Short code or free-text label -> label printed in "CALIDAD DE HEREDERO"
CALIDAD_MAP: dict[str, str] = {
    "C": "Cónyuge/Conv.Civil",
    "H": "Hijo(a)",
    "N": "Nieto(a)",
    "P": "Padre/Madre",
    "A": "Abuelo(a)",
    "HE": "Hermano(a)",
    "S": "Sobrino(a)",
    "T": "Tío(a)",
    "PR": "Primo(a)",
    "O": "Otro",
    "Cónyuge": "Cónyuge/Conv.Civil",
    "Conviviente": "Cónyuge/Conv.Civil",
    "Hijo": "Hijo(a)",
    "Hija": "Hijo(a)",
    "Nieto": "Nieto(a)",
    "Nieta": "Nieto(a)",
    "Padre": "Padre/Madre",
    "Madre": "Padre/Madre",
    "Abuelo": "Abuelo(a)",
    "Abuela": "Abuelo(a)",
    "Hermano": "Hermano(a)",
    "Hermana": "Hermano(a)",
    "Sobrino": "Sobrino(a)",
    "Sobrina": "Sobrino(a)",
    "Tío": "Tío(a)",
    "Tía": "Tío(a)",
    "Primo": "Primo(a)",
    "Prima": "Primo(a)",
    "Otro": "Otro",
    "Otra": "Otro",
}


def text(value: Any) -> str:
    """Render a scalar as form text; absent values become ''."""
    if value is None or value == "":
        return ""
    return str(value)


def join_present(*parts: Any, separator: str = " ") -> str:
    """Join the non-empty parts."""
    return separator.join(str(part) for part in parts if part not in (None, ""))


def parse_int(value: Any) -> int | None:
    """
    Parse a base-10 integer the lenient way form input needs.

    Leading whitespace and a sign are accepted, anything after the digits is
    ignored ("12.5" -> 12, "1500 UF" -> 1500). Returns None when no digits
    lead the value.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    match = _INT_PREFIX.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def to_amount(value: Any) -> int:
    """Monetary amount used in totals; unparseable or missing counts as 0."""
    return parse_int(value) or 0


def format_money(value: Any) -> str:
    """
    Format an amount with '.' as thousands separator and no decimals.

    Examples:
        >>> format_money(1234567)
        '1.234.567'
        >>> format_money("abc")
        'abc'
        >>> format_money(None)
        ''
    """
    if value is None or value == "":
        return ""
    number = parse_int(value)
    if number is None:
        return str(value)
    return f"{number:,}".replace(",", ".")


def format_date(value: Any) -> str:
    """Reorder an ISO-like YYYY-MM-DD date as DD/MM/YYYY; otherwise passthrough."""
    if not value:
        return ""
    date_text = str(value)
    parts = date_text.split("-")
    if len(parts) == 3:
        year, month, day = parts
        return f"{day}/{month}/{year}"
    return date_text


def split_date_parts(value: Any) -> tuple[str, str, str]:
    """Split YYYY-MM-DD into (day, month, year); missing parts become ''."""
    if not value:
        return "", "", ""
    parts = str(value).split("-")
    year = parts[0]
    month = parts[1] if len(parts) > 1 else ""
    day = parts[2] if len(parts) > 2 else ""
    return day, month, year


def split_rut(raw: Any) -> tuple[str, str]:
    """
    Split a RUT/RUN into (body, check character).

    Only digits and K survive; the check character is upper-cased but not
    verified against the body.
    """
    if not raw:
        return "", ""
    clean = _RUT_NOISE.sub("", str(raw))
    if len(clean) < 2:
        return "", ""
    return clean[:-1], clean[-1].upper()


def format_rut(raw: Any) -> str:
    """Render a RUT as 'body-check', or '' when nothing usable was given."""
    body, check = split_rut(raw)
    if not body and not check:
        return ""
    return f"{body}-{check}"


def expand_calidad(raw: Any) -> str:
    """Expand an heir relationship code or label; unknown input passes through."""
    if not raw:
        return ""
    key = str(raw).strip()
    return CALIDAD_MAP.get(key) or CALIDAD_MAP.get(key.upper()) or str(raw)


def presuncion_menaje(valor_primer_bien_raiz: Any) -> int:
    """Household goods presumed at 20% of the first real-estate valuation, rounded half up."""
    base = Decimal(to_amount(valor_primer_bien_raiz))
    return int((base * PRESUNCION_FACTOR).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
