from __future__ import annotations

_UINT32 = 1 << 32
_INT32_MAX = (1 << 31) - 1


def to_int32(value: int) -> int:
    """Wrap an arbitrary Python int into the signed 32-bit range."""
    value %= _UINT32
    return value - _UINT32 if value > _INT32_MAX else value


def district_seed(name: str) -> int:
    """Stable string hash (``h = c + (h << 5) - h``) with int32 wraparound.

    Same name -> same seed on every run and every platform; the empty
    string hashes to 0.
    """
    h = 0
    for ch in name:
        h = to_int32(ord(ch) + to_int32(h << 5) - h)
    return h
