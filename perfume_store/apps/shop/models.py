from decimal import Decimal

from django.conf import settings
from django.db import models

from apps.catalog.models import Perfume


class CartLine(models.Model):
    """
    One perfume in a user's cart.

    `cart_snapshot_price` is the live price captured at the last add; it is
    not refreshed when promotions change afterwards.
    """

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='cart_lines')
    perfume = models.ForeignKey(Perfume, on_delete=models.CASCADE, related_name='cart_lines')
    quantity = models.PositiveIntegerField(default=1)
    cart_snapshot_price = models.DecimalField(max_digits=10, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'shop_cart_line'
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(fields=['user', 'perfume'], name='shop_cart_line_user_perfume_uniq'),
            models.CheckConstraint(condition=models.Q(quantity__gte=1), name='shop_cart_line_quantity_positive'),
        ]

    def __str__(self):
        return f"{self.perfume_id} x{self.quantity} @ {self.cart_snapshot_price}"

    @property
    def line_total(self):
        return self.cart_snapshot_price * self.quantity


class Favorite(models.Model):
    """Wishlist entry."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='favorites')
    perfume = models.ForeignKey(Perfume, on_delete=models.CASCADE, related_name='favorites')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'shop_favorite'
        ordering = ['-created_at', '-id']
        constraints = [
            models.UniqueConstraint(fields=['user', 'perfume'], name='shop_favorite_user_perfume_uniq'),
        ]

    def __str__(self):
        return f"{self.user_id} ♥ {self.perfume_id}"


class Order(models.Model):
    """Confirmed purchase. Its lines are snapshots, independent of the catalog."""

    class Status(models.TextChoices):
        CONFIRMED = 'confirmed', 'Confirmed'
        PROCESSING = 'processing', 'Processing'
        DELIVERED = 'delivered', 'Delivered'
        CANCELLED = 'cancelled', 'Cancelled'

    class PaymentMode(models.TextChoices):
        CASH_ON_DELIVERY = 'cash_on_delivery', 'Cash on delivery'
        CARD = 'card', 'Card'

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='orders')
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    items_count = models.PositiveIntegerField(default=0)
    full_name = models.CharField(max_length=255)
    phone = models.CharField(max_length=50)
    address = models.CharField(max_length=500)
    city = models.CharField(max_length=120)
    postal_code = models.CharField(max_length=20, blank=True)
    payment_mode = models.CharField(
        max_length=20, choices=PaymentMode.choices, default=PaymentMode.CASH_ON_DELIVERY,
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.CONFIRMED)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Owners may cancel only before the order is picked up
    NON_CANCELLABLE = (Status.PROCESSING, Status.DELIVERED, Status.CANCELLED)
    ADMIN_STATUSES = (Status.CONFIRMED, Status.PROCESSING, Status.DELIVERED)

    class Meta:
        db_table = 'shop_order'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['user', 'created_at'], name='shop_order_user_created_idx'),
            models.Index(fields=['status'], name='shop_order_status_idx'),
            models.Index(fields=['created_at'], name='shop_order_created_at_idx'),
        ]

    def __str__(self):
        return f"Order #{self.id} - {self.full_name}"

    @property
    def can_be_cancelled(self):
        return self.status not in self.NON_CANCELLABLE


class OrderLine(models.Model):
    """
    Denormalized copy of a purchased perfume. `perfume_id` is kept for
    reference only: the perfume may be edited or deleted later.
    """

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='lines')
    perfume_id = models.BigIntegerField(null=True, blank=True)
    name = models.CharField(max_length=255)
    brand = models.CharField(max_length=255)
    image_url = models.CharField(max_length=500, blank=True)
    order_snapshot_price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField()
    total_item = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        db_table = 'shop_order_line'
        ordering = ['id']

    def __str__(self):
        return f"{self.name} x{self.quantity}"
