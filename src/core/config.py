"""
Curve configuration.

`CurveConfig` carries every parameter a quote needs; the core keeps no global
state. Curves are usually defined in YAML and loaded fail-closed:

    schema: rangecurve/curve-config/v1
    units: whole            # optional; "wad" (default) or "whole" (scaled by 1e18)
    max_supply: 100
    min_remaining_supply: 10
    fee_bps: 100
    root_tolerance: 1000000000   # optional, always in raw WAD units
    ranges:
      - token_supply_at_boundary: 80
        native_amount_at_boundary: 100   # optional; derived from the formula when absent
        coefficient: 400
        power: 1
        constant_term: 400
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Tuple, Union

import yaml

from ..kernels.python.wad_math_v1 import WAD
from .curve_formula import range_from_formula
from .errors import BoundsViolation, ConfigurationViolation
from .fees import BPS_DENOM
from .ranges import Range, terminal_supply, validate_ranges
from .root_finder import ROOT_TOLERANCE

logger = logging.getLogger(__name__)

CONFIG_SCHEMA = "rangecurve/curve-config/v1"
_UNIT_SCALES = {"wad": 1, "whole": WAD}


@dataclass(frozen=True)
class CurveConfig:
    ranges: Tuple[Range, ...]
    max_supply: int
    min_remaining_supply: int
    fee_bps: int = 0
    root_tolerance: int = ROOT_TOLERANCE

    def __post_init__(self) -> None:
        for name, v in (
            ("max_supply", self.max_supply),
            ("min_remaining_supply", self.min_remaining_supply),
            ("fee_bps", self.fee_bps),
            ("root_tolerance", self.root_tolerance),
        ):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        object.__setattr__(self, "ranges", validate_ranges(self.ranges, self.max_supply))

        floor = terminal_supply(self.ranges)
        if not (floor <= self.min_remaining_supply < self.max_supply):
            raise ConfigurationViolation(
                f"min_remaining_supply must be in [{floor}, {self.max_supply}): {self.min_remaining_supply}"
            )
        if not (0 <= self.fee_bps <= BPS_DENOM):
            raise ConfigurationViolation(f"fee_bps must be in [0, {BPS_DENOM}]: {self.fee_bps}")
        if self.root_tolerance < 1:
            raise ConfigurationViolation(f"root_tolerance must be >= 1: {self.root_tolerance}")


def _require_mapping(obj: Any, *, name: str) -> Mapping[str, Any]:
    if not isinstance(obj, dict):
        raise ConfigurationViolation(f"{name} must be a mapping")
    return obj


def _require_list(obj: Any, *, name: str) -> list[Any]:
    if not isinstance(obj, list):
        raise ConfigurationViolation(f"{name} must be a list")
    return obj


def _require_amount(obj: Any, *, name: str) -> int:
    """Accept YAML ints or decimal digit strings (large values are often quoted)."""
    if isinstance(obj, bool):
        raise ConfigurationViolation(f"{name} must be an integer")
    if isinstance(obj, int):
        return obj
    if isinstance(obj, str):
        text = obj.strip().replace("_", "")
        if text.isascii() and text.isdigit():
            return int(text)
    raise ConfigurationViolation(f"{name} must be an integer, got {obj!r}")


def _parse_range(obj: Any, *, index: int, scale: int, max_supply: int) -> Range:
    name = f"ranges[{index}]"
    raw = _require_mapping(obj, name=name)
    unknown = set(raw) - {
        "token_supply_at_boundary",
        "native_amount_at_boundary",
        "coefficient",
        "power",
        "constant_term",
    }
    if unknown:
        raise ConfigurationViolation(f"{name} has unknown keys: {sorted(unknown)}")

    boundary = _require_amount(raw.get("token_supply_at_boundary"), name=f"{name}.token_supply_at_boundary") * scale
    coefficient = _require_amount(raw.get("coefficient"), name=f"{name}.coefficient") * scale
    power = _require_amount(raw.get("power", 1), name=f"{name}.power")
    constant_term = _require_amount(raw.get("constant_term", 0), name=f"{name}.constant_term") * scale

    if "native_amount_at_boundary" not in raw:
        try:
            return range_from_formula(
                token_supply_at_boundary=boundary,
                coefficient=coefficient,
                power=power,
                constant_term=constant_term,
                max_supply=max_supply,
            )
        except BoundsViolation as exc:
            raise ConfigurationViolation(f"{name}: {exc}") from exc
    native = _require_amount(raw["native_amount_at_boundary"], name=f"{name}.native_amount_at_boundary") * scale
    return Range(
        token_supply_at_boundary=boundary,
        native_amount_at_boundary=native,
        coefficient=coefficient,
        power=power,
        constant_term=constant_term,
    )


def curve_config_from_mapping(root: Any) -> CurveConfig:
    """Validate a parsed YAML/JSON document and build a `CurveConfig`."""
    root = _require_mapping(root, name="config")

    schema = root.get("schema")
    if schema != CONFIG_SCHEMA:
        raise ConfigurationViolation(f"unsupported config schema: {schema!r}")

    units = root.get("units", "wad")
    if units not in _UNIT_SCALES:
        raise ConfigurationViolation(f"units must be one of {sorted(_UNIT_SCALES)}: {units!r}")
    scale = _UNIT_SCALES[units]

    max_supply = _require_amount(root.get("max_supply"), name="max_supply") * scale
    if max_supply <= 0:
        raise ConfigurationViolation(f"max_supply must be positive: {max_supply}")
    min_remaining = _require_amount(root.get("min_remaining_supply"), name="min_remaining_supply") * scale
    fee_bps = _require_amount(root.get("fee_bps", 0), name="fee_bps")
    tolerance = _require_amount(root.get("root_tolerance", ROOT_TOLERANCE), name="root_tolerance")

    ranges = tuple(
        _parse_range(item, index=i, scale=scale, max_supply=max_supply)
        for i, item in enumerate(_require_list(root.get("ranges"), name="ranges"))
    )
    return CurveConfig(
        ranges=ranges,
        max_supply=max_supply,
        min_remaining_supply=min_remaining,
        fee_bps=fee_bps,
        root_tolerance=tolerance,
    )


def load_curve_config(path: Union[str, Path]) -> CurveConfig:
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationViolation(f"{path}: invalid YAML: {exc}") from exc
    config = curve_config_from_mapping(raw)
    logger.info(
        "loaded curve config %s: %d ranges, max_supply=%d, fee_bps=%d",
        path,
        len(config.ranges),
        config.max_supply,
        config.fee_bps,
    )
    return config
