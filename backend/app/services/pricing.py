"""Price resolution and order totals."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from app.config import get_settings
from app.models.cart import PricingSummary

CENT = Decimal("0.01")


def effective_unit_price(product_price: float, variant_price: Optional[float] = None) -> float:
    """Variant price when a variant with a price is selected, else the product price."""
    if variant_price is not None:
        return variant_price
    return product_price


def _to_decimal(value: float) -> Decimal:
    return Decimal(str(value))


def _to_money(value: Decimal) -> float:
    return float(value.quantize(CENT, rounding=ROUND_HALF_UP))


def _line_amount(unit_price: float, quantity: int) -> Decimal:
    return (_to_decimal(unit_price) * quantity).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(unit_price: float, quantity: int) -> float:
    return _to_money(_line_amount(unit_price, quantity))


def calculate_totals(
    lines: Iterable[tuple[float, int]],
    tax_rate: Optional[float] = None,
    shipping_amount: Optional[float] = None,
) -> PricingSummary:
    """Compute subtotal, tax, shipping and total for (unit price, quantity) pairs.

    Each line is rounded half-up to the cent before summing, so the subtotal
    always equals the sum of the line totals. Tax is rounded the same way.
    """
    settings = get_settings()
    rate = _to_decimal(settings.tax_rate if tax_rate is None else tax_rate)
    shipping = _to_decimal(settings.shipping_amount if shipping_amount is None else shipping_amount)

    subtotal = sum((_line_amount(price, quantity) for price, quantity in lines), Decimal("0"))
    tax = (subtotal * rate).quantize(CENT, rounding=ROUND_HALF_UP)
    total = subtotal + tax + shipping

    return PricingSummary(
        subtotal=_to_money(subtotal),
        tax_amount=_to_money(tax),
        shipping_amount=_to_money(shipping),
        total_amount=_to_money(total),
        currency=settings.currency,
    )
