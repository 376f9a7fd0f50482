"""Application-wide constants and thresholds.

All magic numbers should be defined here with clear documentation about their
purpose and rationale. This centralizes configuration values and makes them
easy to tune and understand. Values marked as empirical were chosen by
inspecting charts, not derived, and are exposed through Settings so they can be
revised without code changes.
"""


class IndicatorDefaults:
    """Default periods used when a request does not specify one."""

    SMA_PERIOD = 20
    EMA_PERIOD = 20
    DPO_PERIOD = 20
    RSI_PERIOD = 14
    """
    Wilder's original RSI lookback.
    Source: J. Welles Wilder, New Concepts in Technical Trading Systems (1978)
    """

    MACD_FAST_PERIOD = 12
    MACD_SLOW_PERIOD = 26
    MACD_SIGNAL_PERIOD = 9
    """
    Appel's standard 12/26/9 MACD configuration.
    """

    RSI_MAX = 100.0
    """
    RSI value reported when the average loss is zero (no down closes).
    """


class HullThresholds:
    """Thresholds for convex-hull support/resistance detection."""

    MIN_BARS = 3
    """
    A hull needs at least three points to contain a turn.
    """

    MIN_SEGMENT_BARS = 3
    """
    Minimum index span between consecutive hull vertices.
    Shorter segments connect adjacent bars and are noise rather than trend.
    """


class SwingThresholds:
    """Thresholds for fractal swing detection and validation."""

    LOOKAROUND_BARS = 3
    """
    Bars on each side a swing must strictly exceed (highs) or undercut (lows).
    """

    MIN_BARS = 11
    """
    Minimum series length for swing detection.
    """

    MIN_PRICE_CHANGE = 0.01
    """
    Minimum relative price change (|delta| / average) between consecutive
    accepted swings. Filters 1% wiggles.
    """

    MIN_SEPARATION_BARS = 3
    """
    Minimum index distance between consecutive accepted swings.
    """

    ALTERNATION_AFTER = 3
    """
    Number of accepted swings after which high/low alternation is enforced.
    Empirical: earlier swings are allowed to repeat type while the pattern
    establishes itself.
    """

    CONFIRMATION_BARS = 10
    """
    Bars after a swing during which price must not exceed a swing high (or
    undercut a swing low) for the pivot to count as confirmed. Empirical.
    """

    MAX_VALIDATED_SWINGS = 100
    """
    Upper bound on the most recent validated swings considered for pairing.
    Keeps the quadratic pairing search predictable on long histories.
    """


class FibonacciThresholds:
    """Thresholds for Fibonacci retracement set construction."""

    MIN_BARS = 50
    """
    Minimum series length before retracement lines are produced.
    """

    MIN_RANGE_PCT = 0.005
    """
    Minimum (high - low) / high for a leg to become a retracement set.
    """

    MAX_SETS = 8
    """
    Only the most recently constructed sets are kept. This is a recency bias:
    older legs are superseded by later structure and clutter the chart.
    """

    RETRACEMENT_RATIOS = (0.0, 0.236, 0.382, 0.5, 0.618, 1.0)
    """
    Level fractions of the range above the low. The first and last entries are
    the anchors; the four in between can be invalidated.
    """

    MANUAL_RETRACEMENT_RATIOS = (0.236, 0.382, 0.5, 0.618, 0.764)
    """
    Retracements drawn for an explicit high/low, measured down from the high.
    """

    MANUAL_EXTENSION_RATIOS = (1.272, 1.618)
    """
    Extensions drawn for an explicit high/low, above the high and below the low.
    """
