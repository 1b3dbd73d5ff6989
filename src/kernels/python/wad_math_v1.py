"""
WAD fixed-point math kernel (v1).

Integer-only helpers on values scaled by 1e18:
- mul-div with explicit floor / ceil rounding,
- `ln_wad` / `exp_wad` rational approximations (Solmate / Hyperdrive lineage),
- `pow_wad` for fractional exponents, plus directed variants that widen the raw
  result by a relative error margin so the true value is bounded from one side.

Python ints never overflow, so the 256-bit overflow checks of the Solidity versions are
replaced by explicit domain checks.
"""

from __future__ import annotations


WAD = 10**18

# floor(ln(0.5e-18) * 1e18): exp_wad returns 0 at or below this.
EXP_MIN_WAD = -42139678854452767622
# floor(ln((2**255 - 1) / 1e18) * 1e18)
EXP_MAX_WAD = 135305999368893231589

# 1e-14 relative error, in WAD.
MAX_POW_RELATIVE_ERROR = 10_000


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def mul_div_down(x: int, y: int, d: int) -> int:
    """`floor(x * y / d)` for non-negative operands."""
    for name, v in (("x", x), ("y", y), ("d", d)):
        _require_int(name, v)
    if x < 0 or y < 0:
        raise ValueError("mul_div_down: operands must be non-negative")
    if d <= 0:
        raise ZeroDivisionError("mul_div_down: denominator must be positive")
    return (x * y) // d


def mul_div_up(x: int, y: int, d: int) -> int:
    """`ceil(x * y / d)` for non-negative operands."""
    for name, v in (("x", x), ("y", y), ("d", d)):
        _require_int(name, v)
    if x < 0 or y < 0:
        raise ValueError("mul_div_up: operands must be non-negative")
    if d <= 0:
        raise ZeroDivisionError("mul_div_up: denominator must be positive")
    z = x * y
    if z == 0:
        return 0
    return (z - 1) // d + 1


def ln_wad(x: int) -> int:
    """
    Natural log of a WAD value, returned in WAD.

    Range-reduces to (1, 2) * 2**96 and evaluates an (8, 8)-term rational
    approximation.
    """
    _require_int("x", x)
    if x <= 0:
        raise ValueError(f"ln_wad: argument must be positive, got {x}")

    # ln(2^k * x) = k * ln(2) + ln(x)
    k = x.bit_length() - 1 - 96
    x <<= 159 - k
    x >>= 159

    p = x + 3273285459638523848632254066296
    p = ((p * x) >> 96) + 24828157081833163892658089445524
    p = ((p * x) >> 96) + 43456485725739037958740375743393
    p = ((p * x) >> 96) - 11111509109440967052023855526967
    p = ((p * x) >> 96) - 45023709667254063763336534515857
    p = ((p * x) >> 96) - 14706773417378608786704636184526
    p = p * x - (795164235651350426258249787498 << 96)

    q = x + 5573035233440673466300451813936
    q = ((q * x) >> 96) + 71694874799317883764090561454958
    q = ((q * x) >> 96) + 283447036172924575727196451306956
    q = ((q * x) >> 96) + 401686690394027663651624208769553
    q = ((q * x) >> 96) + 204048457590392012362485061816622
    q = ((q * x) >> 96) + 31853899698501571402653359427138
    q = ((q * x) >> 96) + 909429971244387300277376558375

    # r is in (0, 0.125) * 2**96
    r = p // q

    # scale factor s ~ 5.549, then add k * ln(2) and ln(2**96 / 1e18),
    # then convert from 5**18 * 2**192 basis back to WAD.
    r *= 1677202110996718588342820967067443963516166
    r += 16597577552685614221487285958193947469193820559219878177908093499208371 * k
    r += 600920179829731861736702779321621459595472258049074101567377883020018308
    r >>= 174
    return r


def exp_wad(x: int) -> int:
    """
    e**x for a WAD exponent, returned in WAD.

    Returns 0 when the result is below 0.5 wei.
    """
    _require_int("x", x)
    if x <= EXP_MIN_WAD:
        return 0
    if x >= EXP_MAX_WAD:
        raise ValueError(f"exp_wad: exponent {x} must be less than {EXP_MAX_WAD}")

    # Convert to a 2**96 basis: multiply by 1e18 / 2**96 = 5**18 / 2**78.
    x = (x << 78) // (5**18)

    # exp(x) = exp(x') * 2**k with k = round(x / ln 2), k in [-61, 195]
    k = (((x << 96) // 54916777467707473351141471128) + (2**95)) >> 96
    x = x - k * 54916777467707473351141471128

    p = x + 2772001395605857295435445496992
    p = ((p * x) >> 96) + 44335888930127919016834873520032
    p = ((p * x) >> 96) + 398888492587501845352592340339721
    p = ((p * x) >> 96) + 1993839819670624470859228494792842
    p = p * x + (4385272521454847904659076985693276 << 96)

    z = x + 750530180792738023273180420736
    z = ((z * x) >> 96) + 32788456221302202726307501949080
    w = x - 2218138959503481824038194425854
    w = ((w * z) >> 96) + 892943633302991980437332862907700
    q = z + w - 78174809823045304726920794422040
    q = ((q * w) >> 96) + 4203224763890128580604056984195872

    # r is in (0.09, 0.25) * 2**96
    r = p // q
    return (r * 3822833074963236453042738258902158003155416615667) >> (195 - k)


def pow_wad(x: int, y: int) -> int:
    """`x ** y` for a non-negative WAD base and WAD exponent, via exp(y * ln x)."""
    _require_int("x", x)
    _require_int("y", y)
    if x < 0 or y < 0:
        raise ValueError("pow_wad: base and exponent must be non-negative")
    if y == 0:
        return WAD
    if x == 0:
        return 0
    return exp_wad((ln_wad(x) * y) // WAD)


def _pow_error_margin(raw: int) -> int:
    return mul_div_up(raw, MAX_POW_RELATIVE_ERROR, WAD) + 1


def pow_wad_down(x: int, y: int) -> int:
    """Lower bound on `x ** y` (never above the true power)."""
    raw = pow_wad(x, y)
    margin = _pow_error_margin(raw)
    if raw < margin:
        return 0
    return raw - margin


def pow_wad_up(x: int, y: int) -> int:
    """Upper bound on `x ** y` (never below the true power)."""
    raw = pow_wad(x, y)
    return raw + _pow_error_margin(raw)
