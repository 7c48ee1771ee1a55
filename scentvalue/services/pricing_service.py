"""
Pricing Service - Tare deduction and per-gram pricing.

net  = max(0, gross - tare)
price = net * rate

No rounding happens here; formatting is a display concern.
"""

from typing import Optional

from scentvalue.models.common import PriceQuote, PricingConfig


class PricingService:
    """Prices gross scale readings against a fixed tare and rate."""

    def __init__(self, config: Optional[PricingConfig] = None):
        self.config = config or PricingConfig()

    def net_weight(self, gross_weight: float) -> float:
        """Gross minus tare, clamped at zero."""
        return max(0.0, gross_weight - self.config.tare_grams)

    def quote(self, gross_weight: float) -> PriceQuote:
        """Compute net weight and price for a gross reading."""
        net_weight = self.net_weight(gross_weight)
        return PriceQuote(
            gross_weight=gross_weight,
            net_weight=net_weight,
            price=net_weight * self.config.rate_per_gram,
        )
