from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round to `places` decimals with ties going up, so 83.125 -> 83.13.

    The value is scaled in float first and the scaled float is rounded
    exactly, which reproduces Math.round(value * 100) / 100 from the web client.
    """
    factor = 10 ** places
    scaled = Decimal(value * factor).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return float(scaled) / factor
