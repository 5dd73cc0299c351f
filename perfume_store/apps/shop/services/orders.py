import logging
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import DEFAULT_DB_ALIAS, transaction
from django.db.models import Count, DecimalField, Sum, Value
from django.db.models.functions import Coalesce
from rest_framework.exceptions import NotFound, ValidationError

from perfume_store.exceptions import Conflict
from ..models import Order
from .lookups import require_user

logger = logging.getLogger(__name__)

RECENT_ORDERS_LIMIT = 10


class OrderService:

    def __init__(self, using=DEFAULT_DB_ALIAS):
        self.using = using

    def _orders(self):
        return Order.objects.using(self.using)

    def for_user(self, user_id):
        require_user(user_id, self.using)
        return list(self._orders().filter(user_id=user_id).order_by('-created_at', '-id'))

    def cancel(self, user_id, order_id):
        """
        Owner cancellation. The order and its lines are deleted outright,
        nothing is kept with a cancelled status.
        """
        with transaction.atomic(using=self.using):
            order = self._orders().select_for_update().filter(id=order_id, user_id=user_id).first()
            if not order:
                raise NotFound('Order not found')
            if not order.can_be_cancelled:
                logger.info("ORDER    — cancel refused | order: %s | status: %s", order_id, order.status)
                if order.status == Order.Status.CANCELLED:
                    raise Conflict('This order is already cancelled.')
                raise Conflict('An order being delivered or already delivered cannot be cancelled.')
            order.delete()
        logger.info("ORDER    — order %s cancelled and deleted by user %s", order_id, user_id)

    def set_status(self, order_id, status):
        if status not in Order.ADMIN_STATUSES:
            raise ValidationError({'status': 'Status must be one of: {}.'.format(
                ', '.join(sorted(str(s) for s in Order.ADMIN_STATUSES)),
            )})
        order = self._orders().filter(id=order_id).first()
        if not order:
            raise NotFound('Order not found')
        previous = order.status
        order.status = status
        order.save(update_fields=['status', 'updated_at'])
        logger.info("ORDER    — order %s status: %s → %s", order_id, previous, status)
        return order

    def detail(self, order_id):
        order = self._orders().select_related('user').prefetch_related('lines').filter(id=order_id).first()
        if not order:
            raise NotFound('Order not found')
        return order

    def admin_orders(self, date_from=None, date_to=None, status=None):
        orders = self._orders().select_related('user')
        if date_from:
            orders = orders.filter(created_at__date__gte=date_from)
        if date_to:
            orders = orders.filter(created_at__date__lte=date_to)
        if status and status != 'all':
            orders = orders.filter(status=status)
        logger.debug("ORDER    — admin filter | from: %s | to: %s | status: %s", date_from, date_to, status)
        return list(orders.order_by('-created_at', '-id'))

    def _customer_summaries(self):
        return (
            get_user_model().objects.using(self.using)
            .annotate(
                orders_count=Count('orders'),
                total_spent=Coalesce(
                    Sum('orders__total'),
                    Value(Decimal('0')),
                    output_field=DecimalField(max_digits=12, decimal_places=2),
                ),
            )
            .order_by('-id')
        )

    def customers(self):
        """Every user with their order count and total spent."""
        return list(self._customer_summaries())

    def customer(self, user_id, limit=RECENT_ORDERS_LIMIT):
        """One customer summary and their most recent orders."""
        user = self._customer_summaries().filter(pk=user_id).first()
        if not user:
            raise NotFound('User not found')
        orders = (
            self._orders().filter(user_id=user_id)
            .annotate(lines_count=Count('lines'))
            .order_by('-created_at', '-id')[:limit]
        )
        return user, list(orders)
