import re
from dataclasses import dataclass
from typing import Optional

from .units import MULTIWORD_UNITS, normalize_unit

UNICODE_FRACTIONS = {
    "½": 1 / 2,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "¼": 1 / 4,
    "¾": 3 / 4,
    "⅕": 1 / 5,
    "⅖": 2 / 5,
    "⅗": 3 / 5,
    "⅘": 4 / 5,
    "⅙": 1 / 6,
    "⅚": 5 / 6,
    "⅛": 1 / 8,
    "⅜": 3 / 8,
    "⅝": 5 / 8,
    "⅞": 7 / 8,
}

_FRAC = "".join(UNICODE_FRACTIONS)

# Longest forms first: "1 1/2", "1/2", "1½", "½", "1,000", "2.5" / "2,5", "2"
_NUMBER = (
    rf"\d+\s+\d+/\d+"
    rf"|\d+/\d+"
    rf"|\d+\s*[{_FRAC}]"
    rf"|[{_FRAC}]"
    rf"|\d{{1,3}}(?:,\d{{3}})+(?!\d)"
    rf"|\d+(?:\.\d+|,\d{{1,2}}(?!\d))?"
)

_QTY_RE = re.compile(
    rf"(?P<qty>{_NUMBER})(?:(?P<sep>\s*(?:-|–|to)\s*)(?P<qty_max>{_NUMBER}))?"
)

_WORD = r"[^\W\d_]+\.?"
_TWO_WORDS_RE = re.compile(rf"(?P<gap>\s*)(?P<unit>{_WORD}\s+{_WORD})")
_ONE_WORD_RE = re.compile(rf"(?P<gap>\s*)(?P<unit>{_WORD})")


@dataclass(frozen=True)
class ParsedQuantity:
    """A numeric amount found in free text, with the text around it kept verbatim.

    `text == prefix + qty_text + gap + unit_text + suffix`
    """
    prefix: str
    qty: float
    qty_max: Optional[float]
    range_sep: str
    unit: Optional[str]  # canonical key, None when no unit follows the number
    unit_text: str
    gap: str
    suffix: str


def parse_number(text: str) -> Optional[float]:
    """Parse "2", "2.5", "2,5", "1,000", "1/2", "1 1/2", "½" or "1½"."""
    s = text.strip()
    if not s:
        return None

    try:
        if s[-1] in UNICODE_FRACTIONS:
            whole = s[:-1].strip()
            return (int(whole) if whole else 0) + UNICODE_FRACTIONS[s[-1]]

        if "/" in s:
            parts = s.split()
            whole = int(parts[0]) if len(parts) == 2 else 0
            num, den = parts[-1].split("/")
            if int(den) == 0:
                return None
            return whole + int(num) / int(den)

        if re.fullmatch(r"\d{1,3}(?:,\d{3})+", s):
            return float(s.replace(",", ""))

        return float(s.replace(",", "."))
    except (OverflowError, ValueError):
        # Too many digits to represent
        return None


def _match_unit(rest: str):
    """Return (unit_key, unit_text, gap, remaining) for the unit right after a number."""
    m = _TWO_WORDS_RE.match(rest)
    if m:
        phrase = " ".join(m.group("unit").lower().split())
        if phrase in MULTIWORD_UNITS:
            return normalize_unit(phrase), m.group("unit"), m.group("gap"), rest[m.end():]

    m = _ONE_WORD_RE.match(rest)
    if m:
        key = normalize_unit(m.group("unit"))
        if key:
            return key, m.group("unit"), m.group("gap"), rest[m.end():]

    return None, "", "", rest


def parse_quantity(text: Optional[str]) -> Optional[ParsedQuantity]:
    """
    Find the first amount in an ingredient quantity string.

    "200 g"         -> qty=200, unit="g"
    "1 1/2 cups"    -> qty=1.5, unit="cup"
    "2-3 cloves"    -> qty=2, qty_max=3, unit="clove"
    "3 large eggs"  -> qty=3, unit=None, suffix=" large eggs"
    "to taste"      -> None
    """
    if not text:
        return None

    m = _QTY_RE.search(text)
    if not m:
        return None

    qty = parse_number(m.group("qty"))
    if qty is None:
        return None

    qty_max = None
    range_sep = ""
    if m.group("qty_max"):
        qty_max = parse_number(m.group("qty_max"))
        if qty_max is None:
            return None
        range_sep = m.group("sep")

    unit, unit_text, gap, suffix = _match_unit(text[m.end():])

    return ParsedQuantity(
        prefix=text[:m.start()],
        qty=qty,
        qty_max=qty_max,
        range_sep=range_sep,
        unit=unit,
        unit_text=unit_text,
        gap=gap,
        suffix=suffix,
    )
