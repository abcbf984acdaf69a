"""
Ingredient conversion service.

Rescales ingredient amounts for a new serving count and converts them between
metric and imperial units. Amounts are free text written by a recipe
generator, so nothing here ever raises on bad input: anything that can't be
parsed passes through untouched.
"""

import logging
import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Iterable, Optional

from ..parsing import ParsedQuantity, get_unit_info, parse_quantity
from ..schemas import Ingredient, MeasurementUnit

logger = logging.getLogger("recipe_display.conversion")

# Fractions a cook can actually measure
KITCHEN_FRACTIONS = [
    (0.0, ""),
    (1 / 8, "1/8"),
    (1 / 4, "1/4"),
    (1 / 3, "1/3"),
    (1 / 2, "1/2"),
    (2 / 3, "2/3"),
    (3 / 4, "3/4"),
    (1.0, ""),
]

PLURAL_LABELS = {"cup": "cups"}

OZ_PER_LB = 16
G_PER_OZ = 28.3495


def _round_half_up(value: float, places: int) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    # Enough digits for any finite float
    with localcontext() as ctx:
        ctx.prec = 400
        return Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def format_fraction(qty: float) -> str:
    """Round to a friendly kitchen fraction: 0.5 -> "1/2", 1.7 -> "1 3/4", 14.1 -> "14"."""
    if qty <= 0:
        return "0"
    if qty >= 10:
        return str(_round_half_up(qty, 0))

    whole = int(qty)
    value, label = min(KITCHEN_FRACTIONS, key=lambda f: abs(f[0] - (qty - whole)))
    if value == 1.0:
        whole += 1
    if whole == 0 and not label:
        # Never round a real amount away
        label = "1/8"

    parts = []
    if whole:
        parts.append(str(whole))
    if label:
        parts.append(label)
    return " ".join(parts)


def format_decimal(qty: float) -> str:
    """Round for metric display: 2 decimals under 10, 1 under 100, integer above."""
    if qty <= 0:
        return "0"
    if qty >= 100:
        rounded = _round_half_up(qty, 0)
    elif qty >= 10:
        rounded = _round_half_up(qty, 1)
    else:
        rounded = _round_half_up(qty, 2)
        if rounded == 0:
            # Smallest amount we display
            return "0.01"

    text = f"{rounded:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_quantity(qty: float, unit: Optional[str]) -> str:
    """Metric units get decimals; imperial and count amounts get fractions."""
    info = get_unit_info(unit) if unit else None
    if info and info.system == "metric":
        return format_decimal(qty)
    return format_fraction(qty)


def unit_label(unit: str, formatted_qty: str) -> str:
    plural = PLURAL_LABELS.get(unit)
    if not plural:
        return unit
    single = formatted_qty == "1" or ("/" in formatted_qty and " " not in formatted_qty)
    return unit if single else plural


def auto_select_unit(base_qty: float, kind: str, target_system: MeasurementUnit) -> str:
    """
    Select the most readable unit for a quantity given in base units
    (g, ml, cm) in the target system.
    """
    if target_system == MeasurementUnit.metric:
        if kind == "mass":
            return "kg" if base_qty >= 1000 else "g"
        if kind == "volume":
            return "l" if base_qty >= 1000 else "ml"
        return "cm"

    if kind == "mass":
        return "lb" if base_qty / G_PER_OZ >= OZ_PER_LB else "oz"
    if kind == "volume":
        # 1 tbsp ~ 15 ml, 1/4 cup ~ 60 ml
        if base_qty < 15:
            return "tsp"
        if base_qty < 60:
            return "tbsp"
        return "cup"
    return "in"


def _render(parsed: ParsedQuantity, qty: float, qty_max: Optional[float],
            unit: Optional[str], unit_text: Optional[str], gap: str) -> str:
    text = format_quantity(qty, unit)
    last = text
    if qty_max is not None:
        last = format_quantity(qty_max, unit)
        text = f"{text}{parsed.range_sep}{last}"

    # Converted units get a fresh label; "cup"/"cups" follow the new amount
    if unit and (unit_text is None or unit_text.lower() in (unit, PLURAL_LABELS.get(unit))):
        unit_text = unit_label(unit, last)
    return f"{parsed.prefix}{text}{gap}{unit_text or ''}{parsed.suffix}"


def _transform(amount: str, multiplier: float, to_system: Optional[MeasurementUnit]) -> str:
    """Scale every number in `amount` by `multiplier`, then move it into `to_system`."""
    parsed = parse_quantity(amount)
    if parsed is None:
        logger.debug(f"No quantity in amount {amount!r}, passing through")
        return amount

    qty = parsed.qty * multiplier
    qty_max = parsed.qty_max * multiplier if parsed.qty_max is not None else None
    unit, unit_text, gap = parsed.unit, parsed.unit_text, parsed.gap
    converted = False

    info = get_unit_info(unit) if unit else None
    if to_system is not None and info and info.system and info.system != to_system.value:
        top = qty_max if qty_max is not None else qty
        target = auto_select_unit(top * info.factor, info.kind, to_system)
        target_factor = get_unit_info(target).factor
        qty = qty * info.factor / target_factor
        if qty_max is not None:
            qty_max = qty_max * info.factor / target_factor
        unit, unit_text, gap = target, None, " "
        converted = True

    if not math.isfinite(qty) or (qty_max is not None and not math.isfinite(qty_max)):
        logger.debug(f"Amount {amount!r} out of range after conversion, passing through")
        return amount

    if multiplier == 1 and not converted:
        return amount

    return _render(parsed, qty, qty_max, unit, unit_text, gap)


def _servings_multiplier(original_servings: int, new_servings: int) -> Optional[float]:
    try:
        return new_servings / original_servings
    except OverflowError:
        logger.debug(f"Servings ratio {new_servings}/{original_servings} out of range")
        return None


def scale_amount(amount: str, multiplier: float) -> str:
    """Scale an amount by a multiplier, keeping its unit as written."""
    return _transform(amount, multiplier, None)


def convert_amount_for_servings(amount: str, original_servings: int, new_servings: int) -> str:
    """Rescale an amount written for `original_servings` to `new_servings`."""
    if original_servings == new_servings or original_servings <= 0:
        return amount
    multiplier = _servings_multiplier(original_servings, new_servings)
    if multiplier is None:
        return amount
    return scale_amount(amount, multiplier)


def convert_amount_for_unit(amount: str, from_unit: MeasurementUnit, to_unit: MeasurementUnit) -> str:
    """Convert an amount between metric and imperial."""
    if from_unit == to_unit:
        return amount
    return _transform(amount, 1, to_unit)


def convert_amount(
    amount: str,
    original_servings: int,
    new_servings: int,
    original_unit: MeasurementUnit,
    new_unit: MeasurementUnit,
) -> str:
    """
    Scale for servings and convert units in one pass, rounding only once
    at the end.
    """
    multiplier = 1.0
    if original_servings > 0 and original_servings != new_servings:
        multiplier = _servings_multiplier(original_servings, new_servings)
        if multiplier is None:
            return amount

    to_system = new_unit if new_unit != original_unit else None
    if multiplier == 1 and to_system is None:
        return amount
    return _transform(amount, multiplier, to_system)


def convert_ingredients(
    ingredients: Iterable[Ingredient],
    original_servings: int,
    new_servings: int,
    original_unit: MeasurementUnit,
    new_unit: MeasurementUnit,
) -> list[Ingredient]:
    """
    Convert a list of ingredients for new servings and/or unit.

    Returns new Ingredient instances in the same order; only `amount` changes.
    """
    return [
        ingredient.model_copy(update={
            "amount": convert_amount(
                ingredient.amount,
                original_servings,
                new_servings,
                original_unit,
                new_unit,
            )
        })
        for ingredient in ingredients
    ]
