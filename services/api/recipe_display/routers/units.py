"""
Router for unit conversion utilities.
"""

from fastapi import APIRouter

from ..parsing import parse_quantity
from ..schemas import AmountConvertRequest, AmountConvertResponse, ParsedQuantityOut
from ..services.ingredient_conversion import convert_amount

router = APIRouter()


@router.post("/convert", response_model=AmountConvertResponse)
def convert_units(req: AmountConvertRequest):
    """
    Rescale and/or convert a single free-text amount.
    """
    servings = req.servings or req.original_servings
    converted = convert_amount(
        req.amount,
        original_servings=req.original_servings,
        new_servings=servings,
        original_unit=req.from_unit,
        new_unit=req.to_unit,
    )

    parsed = parse_quantity(req.amount)
    parsed_out = None
    if parsed is not None:
        parsed_out = ParsedQuantityOut(qty=parsed.qty, qty_max=parsed.qty_max, unit=parsed.unit)

    return AmountConvertResponse(
        amount=converted,
        parsed=parsed_out,
        changed=converted != req.amount,
    )
