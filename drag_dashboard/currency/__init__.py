"""Currency extraction, USD conversion and formatting."""

from drag_dashboard.currency.converter import (
    ExchangeRateError,
    convert_to_usd,
    extract_currency_amounts,
    format_currency,
    format_with_usd_equivalent,
    highlight_financial_amounts,
    load_exchange_rates,
)

__all__ = [
    "ExchangeRateError",
    "load_exchange_rates",
    "convert_to_usd",
    "extract_currency_amounts",
    "format_currency",
    "format_with_usd_equivalent",
    "highlight_financial_amounts",
]
