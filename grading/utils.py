from decimal import ROUND_HALF_UP, Decimal


def compute_percentage(earned, possible):
    """
    Whole-number percentage of ``earned`` over ``possible``.

    Halves round up (49.5 -> 50). Returns 0 when nothing is possible.
    """
    if not possible or possible <= 0:
        return 0
    ratio = Decimal(str(earned or 0)) / Decimal(str(possible)) * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
