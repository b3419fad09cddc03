"""
On-disk path encodings used by tile caches.

Each scheme has an ``xy_to_*`` function returning the directory segments
for a tile and a ``zxy_to_*_path`` function returning the full relative
path including the zoom prefix and file extension.
"""

from enum import Enum
from typing import Union


class PathScheme(str, Enum):
    """Supported cache layouts."""
    TC = "tc"  # TileCache: z/xxx/xxx/xxx/yyy/yyy/yyy.ext
    MP = "mp"  # MapProxy: z/xxxx/xxxx/yyyy/yyyy.ext
    TS = "ts"  # safe tree: z/xxx/xxx/yyy/yyy.ext
    ZXY = "zxy"  # flat: z/x/y.ext
    MT = "mt"  # mod_tile hashed: z/a/b/c/d/e.ext


def xy_to_tc(x: int, y: int) -> list[str]:
    """Split x and y into millions/thousands/units groups of 3 digits."""
    return [
        f"{x // 1_000_000:03}",
        f"{(x // 1_000) % 1_000:03}",
        f"{x % 1_000:03}",
        f"{y // 1_000_000:03}",
        f"{(y // 1_000) % 1_000:03}",
        f"{y % 1_000:03}",
    ]


def zxy_to_tc_path(z: int, x: int, y: int, ext: str) -> str:
    tc = xy_to_tc(x, y)
    return f"{z}/{'/'.join(tc)}.{ext}"


def xy_to_mp(x: int, y: int) -> list[str]:
    """Split x and y into two groups of 4 digits each."""
    return [
        f"{x // 10_000:04}",
        f"{x % 10_000:04}",
        f"{y // 10_000:04}",
        f"{y % 10_000:04}",
    ]


def zxy_to_mp_path(z: int, x: int, y: int, ext: str) -> str:
    mp = xy_to_mp(x, y)
    return f"{z}/{'/'.join(mp)}.{ext}"


def xy_to_ts(x: int, y: int) -> list[str]:
    """Split x and y into two groups of 3 digits each."""
    return [
        f"{x // 1_000:03}",
        f"{x % 1_000:03}",
        f"{y // 1_000:03}",
        f"{y % 1_000:03}",
    ]


def zxy_to_ts_path(z: int, x: int, y: int, ext: str) -> str:
    ts = xy_to_ts(x, y)
    return f"{z}/{'/'.join(ts)}.{ext}"


def zxy_to_zxy_path(z: int, x: int, y: int, ext: str) -> str:
    return f"{z}/{x}/{y}.{ext}"


def xy_to_mt(x: int, y: int) -> list[str]:
    """
    mod_tile style hashed directories.

    The low nibbles of x and y are packed into one byte
    (``x_nibble << 4 | y_nibble``), five times, least significant nibble
    first. The bytes are returned most significant first as plain decimals.
    """
    hashed = []
    for _ in range(5):
        hashed.append(((x & 0x0F) << 4) | (y & 0x0F))
        x >>= 4
        y >>= 4
    return [str(b) for b in reversed(hashed)]


def zxy_to_mt_path(z: int, x: int, y: int, ext: str) -> str:
    mt = xy_to_mt(x, y)
    return f"{z}/{'/'.join(mt)}.{ext}"


_PATH_FUNCS = {
    PathScheme.TC: zxy_to_tc_path,
    PathScheme.MP: zxy_to_mp_path,
    PathScheme.TS: zxy_to_ts_path,
    PathScheme.ZXY: zxy_to_zxy_path,
    PathScheme.MT: zxy_to_mt_path,
}


def zxy_to_path(scheme: Union[PathScheme, str], z: int, x: int, y: int, ext: str) -> str:
    """
    Encode a tile path using the named scheme.

    Raises:
        ValueError: If ``scheme`` is not a known PathScheme value
    """
    return _PATH_FUNCS[PathScheme(scheme)](z, x, y, ext)
