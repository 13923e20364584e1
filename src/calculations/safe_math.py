"""Numeric-safety policy shared by both models."""


def safe_div(
    numerator: float,
    denominator: float,
    default: float = 0.0,
    require_positive: bool = False,
) -> float:
    """Divide, substituting a default for degenerate denominators.

    Every division in the models goes through here so that incomplete or
    zeroed project data still yields a complete, finite result.

    Args:
        numerator: Dividend.
        denominator: Divisor.
        default: Value returned when the division is not defined.
        require_positive: Treat negative denominators as degenerate too
            (used where the formula is only meaningful for a positive
            divisor, e.g. DSCR over debt service).

    Returns:
        numerator / denominator, or default.

    Example:
        >>> safe_div(10, 4)
        2.5
        >>> safe_div(10, 0)
        0.0
        >>> safe_div(10, -2, require_positive=True)
        0.0
    """
    if denominator == 0 or (require_positive and denominator < 0):
        return default
    return numerator / denominator
