"""Mathematical utilities for seesaw.

This package provides the arbitrary-precision decimal primitives used by
every pricing function:
- fp_* arithmetic under a fixed high-precision context
- from_fp / to_fp conversions to and from on-chain integers
"""

from seesaw.math.fixed_point import (
    FixedPointError,
    fp_context,
    fp_div,
    fp_pow,
    from_fp,
    to_fp,
)

__all__ = ["FixedPointError", "fp_context", "fp_div", "fp_pow", "from_fp", "to_fp"]
