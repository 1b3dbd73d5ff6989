"""
Rounding-aware fixed-point operations.

`Rounding` is a tagged operation: every call site names the direction it wants
the *result* to err in, and the member dispatches to the floor or ceil kernel.
Values are integers scaled by `WAD` (1e18).
"""

from __future__ import annotations

from enum import Enum, unique

from ..kernels.python.wad_math_v1 import (
    WAD,
    mul_div_down,
    mul_div_up,
    pow_wad_down,
    pow_wad_up,
)


@unique
class Rounding(Enum):
    DOWN = "down"
    UP = "up"

    def opposite(self) -> Rounding:
        return Rounding.UP if self is Rounding.DOWN else Rounding.DOWN

    def mul_div(self, x: int, y: int, d: int) -> int:
        """`x * y / d`, floored for DOWN and ceiled for UP."""
        if self is Rounding.UP:
            return mul_div_up(x, y, d)
        return mul_div_down(x, y, d)

    def mul_wad(self, x: int, y: int) -> int:
        return self.mul_div(x, y, WAD)

    def div_wad(self, x: int, y: int) -> int:
        return self.mul_div(x, WAD, y)

    def pow_wad(self, x: int, exponent: int) -> int:
        """
        `x ** exponent` with both operands in WAD.

        Exponents 1, 2 and 4 are computed with directed multiplications (exact
        up to one rounding step each); anything else goes through ln/exp and
        is widened by the kernel's relative error margin.
        """
        if exponent == WAD:
            return x
        if exponent == 2 * WAD:
            return self.mul_wad(x, x)
        if exponent == 4 * WAD:
            square = self.mul_wad(x, x)
            return self.mul_wad(square, square)
        if self is Rounding.UP:
            return pow_wad_up(x, exponent)
        return pow_wad_down(x, exponent)
