"""Tests for pricing and display formatting."""

import pytest

from scentvalue.models.common import PricingConfig
from scentvalue.services.formatting import format_net, format_number, format_price
from scentvalue.services.pricing_service import PricingService
from scentvalue.services.weight_parser import resolve_weight


@pytest.mark.parametrize("gross", [137, 500, 636, 1136, 2500.5])
def test_quote_above_tare(pricing, gross):
    quote = pricing.quote(gross)

    assert quote.net_weight == pytest.approx(gross - 136)
    assert quote.price == pytest.approx((gross - 136) * 230)


@pytest.mark.parametrize("gross", [0, 1, 100, 136, -50])
def test_quote_at_or_below_tare_is_zero(pricing, gross):
    quote = pricing.quote(gross)

    assert quote.net_weight == 0
    assert quote.price == 0


def test_typed_reading_to_price(pricing):
    """'1kg236' -> 1236g gross -> 1100 net -> 253,000 TSh."""
    gross = resolve_weight("1kg236")
    quote = pricing.quote(gross)

    assert gross == 1236
    assert format_net(quote.net_weight) == "1100.00"
    assert quote.price == pytest.approx(253000)
    assert format_price(quote.price) == "253,000"


def test_custom_config():
    pricing = PricingService(PricingConfig(tare_grams=100, rate_per_gram=10, currency="USD"))

    assert pricing.quote(350).price == 2500
    assert pricing.config.currency == "USD"


def test_pricing_config_is_immutable(pricing_config):
    with pytest.raises(Exception):
        pricing_config.tare_grams = 0


def test_format_helpers():
    assert format_number(636.0) == "636"
    assert format_number(636.5) == "636.5"
    assert format_price(1234567) == "1,234,567"
    assert format_price(0) == "0"
    assert format_price(115.5) == "115.5"
    assert format_net(500) == "500.00"
