"""
Sine waveform sample generator.

Samples are single-precision: each component is rounded to the nearest 32-bit
float, so the values handed to storage match what a float32 sampler produces.
"""

from __future__ import annotations

import math
import struct


def to_float32(value: float) -> float:
    """
    Round a Python float to the nearest IEEE-754 single-precision value.

    Magnitudes beyond float32 range become +/-inf; NaN stays NaN.
    """
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def generate(amplitude: float, frequency: float, phase: float, count: int) -> list[tuple[float, float]]:
    """
    Return `count` (x, y) pairs where x = i and y = amplitude * sin(frequency * i + phase).
    """
    if count < 0:
        raise ValueError("count must be >= 0")

    pairs: list[tuple[float, float]] = []
    for i in range(count):
        x = float(i)
        y = amplitude * math.sin(frequency * x + phase)
        pairs.append((to_float32(x), to_float32(y)))
    return pairs
