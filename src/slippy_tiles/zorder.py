"""
Z-order (Morton code) helpers.

The x coordinate occupies the even bits of the index and y the odd bits,
so walking indices 0, 1, 2, 3 visits (0, 0), (1, 0), (0, 1), (1, 1).
"""


def xy_to_zorder(x: int, y: int) -> int:
    """Interleave the bits of ``x`` and ``y`` into one index."""
    if x < 0 or y < 0:
        raise ValueError(f"z-order coordinates must be non-negative, got ({x}, {y})")
    zorder = 0
    bit = 0
    while x or y:
        zorder |= (x & 1) << (2 * bit)
        zorder |= (y & 1) << (2 * bit + 1)
        x >>= 1
        y >>= 1
        bit += 1
    return zorder


def zorder_to_xy(zorder: int) -> tuple[int, int]:
    """Split a z-order index back into ``(x, y)``."""
    if zorder < 0:
        raise ValueError(f"z-order index must be non-negative, got {zorder}")
    x = 0
    y = 0
    bit = 0
    while zorder:
        x |= (zorder & 1) << bit
        y |= ((zorder >> 1) & 1) << bit
        zorder >>= 2
        bit += 1
    return x, y
