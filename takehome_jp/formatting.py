"""Yen display helpers shared by the formula strings."""


def format_yen(value: float) -> str:
    """Format a yen amount with thousands separators.

    Integral values print without decimals; fractional values (possible in the
    salary-deduction stage) keep up to 3 decimals, trailing zeros dropped.
    """
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")
