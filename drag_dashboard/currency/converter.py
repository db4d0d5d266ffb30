"""
Currency extraction, conversion and formatting for evidence text.

Finds monetary amounts such as "$180M", "CHF 180M" or "€50 million" in free
text, converts them to USD using historical yearly exchange rates, and
annotates the text with highlighted spans.

Exchange rates come from exchange_rates.json:

    {"rates": {"2023": {"CHF": 0.94, "EUR": 0.92, ...}, ...}}

A rate is units of foreign currency per 1 USD, so converting to USD divides
by the rate (CHF 180M at 0.94 -> USD 191.49M).
"""

import html
import json
import logging
import re
from decimal import ROUND_HALF_UP, Decimal
from functools import lru_cache
from pathlib import Path
from typing import Mapping

from drag_dashboard.config import get_exchange_rates_path
from drag_dashboard.constants import (
    BASE_CURRENCY,
    BILLION,
    MILLION,
    SYMBOL_TO_CURRENCY,
    THOUSAND,
)
from drag_dashboard.domain.models import CurrencyAmount

logger = logging.getLogger(__name__)

RateTable = Mapping[str, Mapping[str, float]]

# Longer words are listed first so "million" isn't matched as "m". No boundary
# after the word: "$2.5bn" is 2.5 billion, matched as "$2.5b".
_MAGNITUDE = r"(?:\s*((?i:million|billion|M|B)))?"
_NUMBER = r"(\d+(?:\.\d+)?)"

# $180M, $180 million, $1.2 billion
DOLLAR_PATTERN = re.compile(r"\$\s*" + _NUMBER + _MAGNITUDE)
# CHF 180M, EUR 50 million
CODE_PATTERN = re.compile(r"\b([A-Z]{3})\s+" + _NUMBER + _MAGNITUDE)
# €50M, £30M, ¥1000M
SYMBOL_PATTERN = re.compile(r"([€£¥])\s*" + _NUMBER + _MAGNITUDE)

_CENTS = Decimal("0.01")

HIGHLIGHT_TEMPLATE = '<span class="financial-amount" title="{title}">{formatted}</span>'


class ExchangeRateError(ValueError):
    """Raised when exchange_rates.json doesn't have a 'rates' object."""


@lru_cache
def load_exchange_rates(path: Path | None = None) -> dict[str, dict[str, float]]:
    """
    Load the year -> currency -> rate table (once per path).

    Args:
        path: Rates file (default: configured exchange_rates.json)

    Returns:
        Mapping of year string to {currency code: rate}
    """
    rates_path = path or get_exchange_rates_path()
    with open(rates_path, encoding="utf-8") as f:
        data = json.load(f)

    rates = data.get("rates") if isinstance(data, dict) else None
    if not isinstance(rates, dict):
        raise ExchangeRateError(f"No 'rates' object in {rates_path}")

    return {
        str(year): {code: float(rate) for code, rate in (year_rates or {}).items()}
        for year, year_rates in rates.items()
    }


def convert_to_usd(
    amount: float,
    currency: str,
    year: str | int,
    rates: RateTable | None = None,
) -> float | None:
    """
    Convert an amount in a foreign currency to USD using that year's rate.

    Args:
        amount: Amount in currency units
        currency: ISO currency code (e.g. "CHF")
        year: Fiscal year the amount refers to
        rates: Rate table (default: loaded from exchange_rates.json)

    Returns:
        Amount in USD, or None if no rate is available
    """
    if currency == BASE_CURRENCY:
        return amount

    table = rates if rates is not None else load_exchange_rates()
    year_key = str(year)
    year_rates = table.get(year_key)
    if not year_rates:
        logger.warning(f"No exchange rates available for year {year_key}")
        return None

    rate = year_rates.get(currency)
    if not rate:
        logger.warning(f"No exchange rate available for {currency} in {year_key}")
        return None

    return amount / rate


def _scale(number: str, magnitude: str | None) -> float:
    amount = float(number)
    if magnitude:
        word = magnitude.lower()
        if word in ("m", "million"):
            amount *= MILLION
        elif word in ("b", "billion"):
            amount *= BILLION
    return amount


def extract_currency_amounts(text: str) -> list[CurrencyAmount]:
    """
    Extract currency amounts from text.

    Runs three passes in order ($ amounts, ISO code amounts, €/£/¥ amounts)
    and returns every match of each pass, left to right. The same substring
    may be reported by more than one pass.
    """
    amounts: list[CurrencyAmount] = []
    if not text:
        return amounts

    for match in DOLLAR_PATTERN.finditer(text):
        number, magnitude = match.groups()
        amounts.append(CurrencyAmount(_scale(number, magnitude), BASE_CURRENCY, match.group(0)))

    for match in CODE_PATTERN.finditer(text):
        code, number, magnitude = match.groups()
        amounts.append(CurrencyAmount(_scale(number, magnitude), code, match.group(0)))

    for match in SYMBOL_PATTERN.finditer(text):
        symbol, number, magnitude = match.groups()
        amounts.append(
            CurrencyAmount(_scale(number, magnitude), SYMBOL_TO_CURRENCY[symbol], match.group(0))
        )

    return amounts


def format_currency(amount: float, currency: str) -> str:
    """Format an amount with a B/M/K suffix, e.g. "USD 1.50B"."""
    abs_amount = abs(amount)

    if abs_amount >= BILLION:
        formatted = f"{_two_decimals(amount / BILLION)}B"
    elif abs_amount >= MILLION:
        formatted = f"{_two_decimals(amount / MILLION)}M"
    elif abs_amount >= THOUSAND:
        formatted = f"{_two_decimals(amount / THOUSAND)}K"
    else:
        formatted = _two_decimals(amount)

    return f"{currency} {formatted}"


def _two_decimals(value: float) -> str:
    # Exact binary value, ties away from zero: 1.125 -> "1.13", -0.125 -> "-0.13"
    return str(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


def format_with_usd_equivalent(
    amount: float,
    currency: str,
    year: str | int,
    rates: RateTable | None = None,
) -> str:
    """Format an amount, appending its USD equivalent for foreign currencies."""
    formatted = format_currency(amount, currency)

    if currency == BASE_CURRENCY:
        return formatted

    usd_amount = convert_to_usd(amount, currency, year, rates=rates)
    if usd_amount is None:
        return f"{formatted} (USD rate unavailable)"

    return f"{formatted} (~{format_currency(usd_amount, BASE_CURRENCY)})"


def highlight_financial_amounts(
    text: str,
    year: str | int,
    show_usd: bool = False,
    rates: RateTable | None = None,
) -> str:
    """
    Wrap every currency amount in text with a highlight span.

    Matches are replaced in reverse discovery order, each at the last
    occurrence of its original substring in the text built so far. A
    repeated amount ("$5M then $5M") therefore lands its second replacement
    inside the first span's title attribute; callers rendering the result
    get the same markup the dashboard always produced.

    Args:
        text: Evidence text
        year: Fiscal year used for USD conversion
        show_usd: Append USD equivalents for foreign currencies
        rates: Rate table (default: loaded from exchange_rates.json)

    Returns:
        Text with <span class="financial-amount"> annotations
    """
    amounts = extract_currency_amounts(text)
    if not amounts:
        return text

    result = text
    for found in reversed(amounts):
        if show_usd:
            formatted = format_with_usd_equivalent(found.amount, found.currency, year, rates=rates)
        else:
            formatted = format_currency(found.amount, found.currency)

        index = result.rfind(found.original)
        if index == -1:
            continue

        replacement = HIGHLIGHT_TEMPLATE.format(
            title=html.escape(found.original, quote=True), formatted=formatted
        )
        result = result[:index] + replacement + result[index + len(found.original) :]

    return result
