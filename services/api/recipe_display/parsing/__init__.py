from .quantity_parser import ParsedQuantity, parse_number, parse_quantity
from .units import UNITS_DB, UnitInfo, get_unit_info, normalize_unit

__all__ = ["ParsedQuantity", "parse_number", "parse_quantity", "UNITS_DB", "UnitInfo", "get_unit_info", "normalize_unit"]
