"""Symbol validation utilities."""

MAX_SYMBOL_LENGTH = 10


def is_valid_symbol(symbol: str) -> bool:
    """
    Validate a ticker or index symbol.

    Allows letters, digits, periods (BRK.B), hyphens and a caret for index
    symbols (^GSPC). Ratio symbols such as "XLK/SPY" are not single symbols
    and are rejected here; see ``stockcharts.indicators.ratio``.

    Args:
        symbol: The symbol to validate (should already be normalized)

    Returns:
        True if symbol format is valid, False otherwise
    """
    if not symbol or len(symbol) > MAX_SYMBOL_LENGTH:
        return False
    cleaned = symbol.replace("^", "").replace(".", "").replace("-", "")
    return cleaned.isalnum()


def normalize_symbol(symbol: str) -> str:
    """Uppercase and strip a symbol."""
    return symbol.upper().strip()
