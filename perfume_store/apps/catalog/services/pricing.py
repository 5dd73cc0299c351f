"""
Promotion-aware pricing.

The catalog listing, the cart and (through the cart snapshot) the checkout all
price a perfume through `quote()`, so the three sites cannot disagree for the
same perfume, promotions and day.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP

from django.utils import timezone

from ..models import MAX_DISCOUNT, MIN_DISCOUNT

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')
HUNDRED = Decimal('100')


def today():
    """Reference date for promotion windows, in the configured TIME_ZONE."""
    return timezone.localdate()


def resolve_promotion(perfume_id, promotions, reference_date):
    """
    Best running promotion for one perfume, or None.

    Running = active flag set and reference_date within [start_date, end_date],
    both bounds inclusive. Best = highest discount; ties go to the lowest id.
    Promotions attached to another perfume are ignored.
    """
    running = [
        promo for promo in promotions
        if promo.perfume_id == perfume_id and promo.is_running_on(reference_date)
    ]
    if not running:
        return None
    return min(running, key=lambda promo: (-promo.discount_percentage, promo.id))


def final_price(base_price, discount_percentage=None):
    """
    Apply a percentage discount, rounding half-up to the cent.

    Without a discount the base price is returned untouched. A discount outside
    the allowed range is ignored rather than risk a negative price.
    """
    base_price = Decimal(base_price)
    if discount_percentage is None:
        return base_price
    if not MIN_DISCOUNT <= discount_percentage <= MAX_DISCOUNT:
        logger.warning("PRICING — discount %s%% out of range, keeping base price %s", discount_percentage, base_price)
        return base_price
    discounted = base_price * (HUNDRED - Decimal(discount_percentage)) / HUNDRED
    return discounted.quantize(CENT, rounding=ROUND_HALF_UP)


class PriceQuote:
    """Live price of a perfume on a given day, with the promotion behind it."""

    def __init__(self, perfume, promotion, live_price, reference_date):
        self.perfume = perfume
        self.promotion = promotion
        self.live_price = live_price
        self.reference_date = reference_date

    @property
    def base_price(self):
        return self.perfume.price

    @property
    def has_active_promotion(self):
        return self.promotion is not None

    @property
    def discount_percentage(self):
        return self.promotion.discount_percentage if self.promotion else None

    def __repr__(self):
        return "<PriceQuote perfume={} live={} promo={}>".format(
            self.perfume.pk, self.live_price, getattr(self.promotion, 'pk', None),
        )


def quote(perfume, promotions=None, reference_date=None):
    """
    Price one perfume.

    `promotions` defaults to the perfume's prefetched `running_promotions`
    (see listing.running_promotions_prefetch) or, failing that, all of its
    promotion rows.
    """
    reference_date = reference_date or today()
    if promotions is None:
        promotions = getattr(perfume, 'running_promotions', None)
    if promotions is None:
        promotions = perfume.promotions.all()
    promotion = resolve_promotion(perfume.pk, promotions, reference_date)
    live_price = final_price(
        perfume.price,
        promotion.discount_percentage if promotion else None,
    )
    return PriceQuote(perfume, promotion, live_price, reference_date)
