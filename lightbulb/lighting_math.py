"""
Mathematical helpers for smooth, imperceptible color transitions.
"""


def smoothstep(t: float) -> float:
    """Smooth ease-in / ease-out curve."""
    return t * t * (3 - 2 * t)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation."""
    return a + (b - a) * t


def clamp(value: float, low: float, high: float) -> float:
    """
    Clamp value into [low, high].

    Bounds may be given in either order.
    """
    if low > high:
        low, high = high, low
    return max(low, min(high, value))
