"""
Cart mutations.

Every add re-prices the whole line at today's live price: the cart keeps one
current price per line, it is not a ledger of what each unit cost when it was
added.

Known race: the update-or-insert below is not serialized. Two concurrent
first adds of the same perfume by the same user both miss the update, and the
second insert fails on the (user, perfume) unique constraint; that surfaces
as StoreFailure and the client may simply retry. Quantity increments on an
existing line are done in SQL and do not lose updates.
"""
import logging

from django.db import DEFAULT_DB_ALIAS, transaction
from django.db.models import F
from rest_framework.exceptions import NotFound, ValidationError

from apps.catalog.services.listing import running_promotions_prefetch
from apps.catalog.services.pricing import quote, today
from ..models import CartLine
from .lookups import require_perfume, require_user

logger = logging.getLogger(__name__)


class PricedCartLine:
    """A cart line next to what the same perfume costs today."""

    def __init__(self, line, price_quote):
        self.line = line
        self.quote = price_quote

    @property
    def live_price(self):
        return self.quote.live_price

    @property
    def discount_percentage(self):
        return self.quote.discount_percentage

    @property
    def has_active_promotion(self):
        return self.quote.has_active_promotion


class CartService:

    def __init__(self, using=DEFAULT_DB_ALIAS):
        self.using = using

    def add_or_update(self, user_id, perfume_id, quantity, client_price=None, reference_date=None):
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError({'quantity': 'Quantity must be a positive integer.'})

        require_user(user_id, self.using)
        perfume = require_perfume(perfume_id, self.using)

        price_quote = quote(perfume, reference_date=reference_date or today())
        live_price = price_quote.live_price
        if client_price is not None and client_price != live_price:
            logger.info(
                "CART     — client price %s ignored for perfume %s, using %s",
                client_price, perfume_id, live_price,
            )

        with transaction.atomic(using=self.using):
            lines = CartLine.objects.using(self.using).filter(user_id=user_id, perfume_id=perfume_id)
            updated = lines.update(
                quantity=F('quantity') + quantity,
                cart_snapshot_price=live_price,
            )
            if not updated:
                CartLine.objects.using(self.using).create(
                    user_id=user_id,
                    perfume_id=perfume_id,
                    quantity=quantity,
                    cart_snapshot_price=live_price,
                )
            line = lines.select_related('perfume').get()

        logger.info(
            "CART     — user: %s | perfume: %s | qty: +%d → %d | price: %s%s",
            user_id, perfume_id, quantity, line.quantity, live_price,
            " (-{}%)".format(price_quote.discount_percentage) if price_quote.has_active_promotion else "",
        )
        return line

    def lines(self, user_id, reference_date=None):
        reference_date = reference_date or today()
        require_user(user_id, self.using)
        cart = (
            CartLine.objects.using(self.using)
            .filter(user_id=user_id)
            .select_related('perfume')
            .prefetch_related(running_promotions_prefetch(reference_date, self.using, 'perfume__promotions'))
            .order_by('id')
        )
        return [PricedCartLine(line, quote(line.perfume, reference_date=reference_date)) for line in cart]

    def remove_line(self, user_id, line_id):
        deleted, _ = CartLine.objects.using(self.using).filter(id=line_id, user_id=user_id).delete()
        if not deleted:
            raise NotFound('Cart line not found')
        logger.info("CART     — user: %s | line %s removed", user_id, line_id)
