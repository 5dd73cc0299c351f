import logging
from decimal import Decimal

from django.db import DEFAULT_DB_ALIAS, transaction

from perfume_store.exceptions import EmptyCart
from ..models import CartLine, Order, OrderLine
from ..serializers import ShippingDetailsSerializer
from .lookups import require_user

logger = logging.getLogger(__name__)


class CheckoutService:
    """
    Turns a user's cart into a confirmed order.

    The cart's snapshot prices are charged as they are: promotions are not
    re-resolved here, so a price captured before a promotion ended is still
    the one billed. Stock is not decremented.
    """

    def __init__(self, using=DEFAULT_DB_ALIAS):
        self.using = using

    def locked_cart(self, user_id):
        """
        The user's cart lines, row-locked. Only the cart rows are locked,
        never the joined perfumes, which other checkouts share.
        """
        return (
            CartLine.objects.using(self.using)
            .select_for_update(of=('self',))
            .filter(user_id=user_id)
            .select_related('perfume')
            .order_by('id')
        )

    def checkout(self, user_id, shipping_details):
        shipping = ShippingDetailsSerializer(data=shipping_details)
        shipping.is_valid(raise_exception=True)
        require_user(user_id, self.using)

        # Locking the cart rows makes a duplicate concurrent checkout wait,
        # then find the cart empty
        with transaction.atomic(using=self.using):
            cart = list(self.locked_cart(user_id))
            if not cart:
                logger.info("CHECKOUT — user: %s | cart empty", user_id)
                raise EmptyCart()

            total = sum((line.line_total for line in cart), Decimal('0'))

            order = Order.objects.using(self.using).create(
                user_id=user_id,
                total=total,
                items_count=len(cart),
                status=Order.Status.CONFIRMED,
                **shipping.validated_data
            )
            OrderLine.objects.using(self.using).bulk_create([
                OrderLine(
                    order=order,
                    perfume_id=line.perfume_id,
                    name=line.perfume.name,
                    brand=line.perfume.brand,
                    image_url=line.perfume.image_url,
                    order_snapshot_price=line.cart_snapshot_price,
                    quantity=line.quantity,
                    total_item=line.line_total,
                )
                for line in cart
            ])
            CartLine.objects.using(self.using).filter(id__in=[line.id for line in cart]).delete()

        logger.info(
            "CHECKOUT — user: %s | order: %s | lines: %d | total: %s",
            user_id, order.id, len(cart), total,
        )
        return order
