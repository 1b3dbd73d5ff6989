"""
Bonding-curve quote engine (functional core).
"""

from .config import CurveConfig, curve_config_from_mapping, load_curve_config
from .curve_formula import evaluate, range_from_formula
from .errors import (
    BoundsViolation,
    ConfigurationViolation,
    CurveError,
    DomainViolation,
    InvalidNativeAmounts,
    NumericalInconsistency,
)
from .fees import BPS_DENOM, compute_fee
from .fixed_point import Rounding
from .quoter import TradeQuote, quote_buy_exact_in, quote_buy_exact_out, quote_sell_exact_in
from .range_walker import Direction, RangeSegment, buy_exact_in, buy_exact_out, sell_exact_in, walk_ranges
from .ranges import Range, validate_ranges
from .root_finder import ROOT_TOLERANCE, find_root

__all__ = [
    "CurveConfig",
    "curve_config_from_mapping",
    "load_curve_config",
    "evaluate",
    "range_from_formula",
    "BoundsViolation",
    "ConfigurationViolation",
    "CurveError",
    "DomainViolation",
    "InvalidNativeAmounts",
    "NumericalInconsistency",
    "BPS_DENOM",
    "compute_fee",
    "Rounding",
    "TradeQuote",
    "quote_buy_exact_in",
    "quote_buy_exact_out",
    "quote_sell_exact_in",
    "Direction",
    "RangeSegment",
    "buy_exact_in",
    "buy_exact_out",
    "sell_exact_in",
    "walk_ranges",
    "Range",
    "validate_ranges",
    "ROOT_TOLERANCE",
    "find_root",
]
