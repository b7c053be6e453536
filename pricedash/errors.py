"""
Error types for the pricedash pipeline.
"""

__all__ = ["InvalidArgument"]


class InvalidArgument(ValueError):
    """
    Raised when a pipeline parameter is outside its documented domain.

    Covers non-positive `length`, `window` or `horizon_months`, empty symbols,
    and malformed random sequences. Prices are never rejected; they are clamped.
    """
