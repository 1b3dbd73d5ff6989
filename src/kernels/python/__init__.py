"""
Production Python kernels.

These modules are:
- deterministic (integer-only, no floats anywhere),
- pure functions over WAD-scaled ints,
- explicit about rounding: every lossy operation has a floor and a ceil form.
"""
