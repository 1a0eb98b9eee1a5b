"""Engine exceptions."""


class UndefinedBreakEvenError(ValueError):
    """Combined first-visit fee (first + other) is zero, so the rate ratio is undefined."""
