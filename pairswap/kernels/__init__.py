"""
Integer-only arithmetic kernels.

- `safe_math`: checked uint256 add/sub/mul, floor sqrt and min
- `uq112x112`: fixed-point codec used by the cumulative price accumulators
"""
