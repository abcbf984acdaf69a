"""
Unit table for ingredient quantities.

Maps the many ways a recipe spells a unit onto a canonical key, and knows the
kind, base factor and measurement system of every canonical unit.
"""

from typing import Optional, Literal, NamedTuple

UnitKind = Literal["mass", "volume", "length", "count"]


class UnitInfo(NamedTuple):
    kind: UnitKind
    factor: float  # to base unit: g (mass), ml (volume), cm (length), each (count)
    system: Optional[str]  # "metric", "imperial" or None for count units


# Canonical unit -> info
UNITS_DB = {
    # Mass (base: g)
    "mg": UnitInfo("mass", 0.001, "metric"),
    "g": UnitInfo("mass", 1.0, "metric"),
    "kg": UnitInfo("mass", 1000.0, "metric"),
    "oz": UnitInfo("mass", 28.3495, "imperial"),
    "lb": UnitInfo("mass", 453.592, "imperial"),

    # Volume (base: ml)
    "ml": UnitInfo("volume", 1.0, "metric"),
    "cl": UnitInfo("volume", 10.0, "metric"),
    "dl": UnitInfo("volume", 100.0, "metric"),
    "l": UnitInfo("volume", 1000.0, "metric"),
    "tsp": UnitInfo("volume", 4.92892, "imperial"),
    "tbsp": UnitInfo("volume", 14.7868, "imperial"),
    "fl oz": UnitInfo("volume", 29.5735, "imperial"),
    "cup": UnitInfo("volume", 236.588, "imperial"),  # US cup
    "pt": UnitInfo("volume", 473.176, "imperial"),
    "qt": UnitInfo("volume", 946.353, "imperial"),
    "gal": UnitInfo("volume", 3785.41, "imperial"),

    # Length (base: cm)
    "mm": UnitInfo("length", 0.1, "metric"),
    "cm": UnitInfo("length", 1.0, "metric"),
    "in": UnitInfo("length", 2.54, "imperial"),

    # Count (base: each)
    "each": UnitInfo("count", 1.0, None),
    "piece": UnitInfo("count", 1.0, None),
    "clove": UnitInfo("count", 1.0, None),
    "slice": UnitInfo("count", 1.0, None),
    "can": UnitInfo("count", 1.0, None),
    "package": UnitInfo("count", 1.0, None),
    "bunch": UnitInfo("count", 1.0, None),
    "pinch": UnitInfo("count", 1.0, None),
    "stick": UnitInfo("count", 1.0, None),
    "sprig": UnitInfo("count", 1.0, None),
    "handful": UnitInfo("count", 1.0, None),
}

# Case-sensitive shorthands, checked before lowercasing
STRICT_SYNONYMS = {
    "t": "tsp",
    "T": "tbsp",
}

SYNONYMS = {
    "gr": "g",
    "gram": "g",
    "gramme": "g",
    "kilo": "kg",
    "kilogram": "kg",
    "milligram": "mg",
    "ounce": "oz",
    "pound": "lb",
    "lbs": "lb",
    "milliliter": "ml",
    "millilitre": "ml",
    "centiliter": "cl",
    "centilitre": "cl",
    "deciliter": "dl",
    "decilitre": "dl",
    "liter": "l",
    "litre": "l",
    "ltr": "l",
    "teaspoon": "tsp",
    "tablespoon": "tbsp",
    "tbs": "tbsp",
    "tbl": "tbsp",
    "fl. oz": "fl oz",
    "floz": "fl oz",
    "fluid ounce": "fl oz",
    "c": "cup",
    "pint": "pt",
    "quart": "qt",
    "gallon": "gal",
    "millimeter": "mm",
    "millimetre": "mm",
    "centimeter": "cm",
    "centimetre": "cm",
    "inch": "in",
    "inches": "in",
    "pc": "piece",
    "pcs": "piece",
    "pkg": "package",
    "bunches": "bunch",
    "pinches": "pinch",
}

# Phrases that span two words; a parser must try these before single words
MULTIWORD_UNITS = {"fl oz", "fl. oz", "fluid ounce", "fluid ounces"}


def _lookup(u: str) -> Optional[str]:
    if u in UNITS_DB:
        return u
    if u in SYNONYMS:
        return SYNONYMS[u]
    return None


def normalize_unit(unit: Optional[str]) -> Optional[str]:
    """Normalize a unit string to a key in UNITS_DB, or None if it isn't a unit."""
    if not unit:
        return None

    raw_clean = " ".join(unit.split()).rstrip('.')
    if raw_clean in STRICT_SYNONYMS:
        return STRICT_SYNONYMS[raw_clean]

    u = raw_clean.lower()
    found = _lookup(u)
    if found:
        return found

    # Plurals: "grams", "cups", "dashes"
    if u.endswith('es') and _lookup(u[:-2]):
        return _lookup(u[:-2])
    if u.endswith('s') and _lookup(u[:-1]):
        return _lookup(u[:-1])

    return None


def get_unit_info(unit: str) -> Optional[UnitInfo]:
    """Get kind, factor and system for a normalized unit."""
    return UNITS_DB.get(unit)
