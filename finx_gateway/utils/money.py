"""Currency rounding helpers"""

import math


def round_currency(value: float) -> int:
    """Round to the nearest whole currency unit, halves rounded up"""
    return int(math.floor(value + 0.5))
