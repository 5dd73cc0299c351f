from rest_framework import serializers

from apps.catalog.serializers import CatalogEntrySerializer
from .models import CartLine, Order, OrderLine


# ─────────────────────────────────────────
#  Input
# ─────────────────────────────────────────
class CartAddSerializer(serializers.Serializer):
    user_id = serializers.IntegerField(min_value=1)
    item_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)
    # Advisory only, the server always reprices
    client_supplied_price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)


class ShippingDetailsSerializer(serializers.Serializer):
    name = serializers.CharField(source='full_name', max_length=255)
    phone = serializers.CharField(max_length=50)
    address = serializers.CharField(max_length=500)
    city = serializers.CharField(max_length=120)
    postal_code = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    payment_mode = serializers.ChoiceField(
        choices=Order.PaymentMode.choices, required=False, default=Order.PaymentMode.CASH_ON_DELIVERY,
    )


class CheckoutSerializer(ShippingDetailsSerializer):
    user_id = serializers.IntegerField(min_value=1)


class FavoriteInputSerializer(serializers.Serializer):
    user_id = serializers.IntegerField(min_value=1)
    perfume_id = serializers.IntegerField(min_value=1)


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=sorted(str(s) for s in Order.ADMIN_STATUSES))


class OrderFilterSerializer(serializers.Serializer):
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    status = serializers.ChoiceField(choices=['all'] + list(Order.Status.values), required=False)


# ─────────────────────────────────────────
#  Output
# ─────────────────────────────────────────
class CartLineSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source='perfume.name', read_only=True)
    brand = serializers.CharField(source='perfume.brand', read_only=True)

    class Meta:
        model = CartLine
        fields = ('id', 'perfume', 'name', 'brand', 'quantity', 'cart_snapshot_price', 'updated_at')


class PricedCartLineSerializer(serializers.Serializer):
    """Cart line with today's price next to the captured one."""

    id = serializers.IntegerField(source='line.id')
    perfume_id = serializers.IntegerField(source='line.perfume_id')
    name = serializers.CharField(source='line.perfume.name')
    brand = serializers.CharField(source='line.perfume.brand')
    image_url = serializers.CharField(source='line.perfume.image_url')
    quantity = serializers.IntegerField(source='line.quantity')
    cart_snapshot_price = serializers.DecimalField(source='line.cart_snapshot_price', max_digits=10, decimal_places=2)
    base_price = serializers.DecimalField(source='line.perfume.price', max_digits=10, decimal_places=2)
    live_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    discount_percentage = serializers.IntegerField(allow_null=True)
    has_active_promotion = serializers.BooleanField()
    line_total = serializers.DecimalField(source='line.line_total', max_digits=12, decimal_places=2)


class OrderLineSerializer(serializers.ModelSerializer):

    class Meta:
        model = OrderLine
        fields = ('id', 'perfume_id', 'name', 'brand', 'image_url', 'order_snapshot_price', 'quantity', 'total_item')


class OrderSerializer(serializers.ModelSerializer):

    class Meta:
        model = Order
        fields = (
            'id', 'total', 'items_count', 'full_name', 'phone', 'address', 'city',
            'postal_code', 'payment_mode', 'status', 'created_at',
        )


class AdminOrderSerializer(OrderSerializer):
    customer_name = serializers.SerializerMethodField()
    customer_email = serializers.EmailField(source='user.email', read_only=True)

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ('user', 'customer_name', 'customer_email')

    def get_customer_name(self, order):
        return order.user.get_full_name() or order.user.get_username()


class AdminOrderDetailSerializer(AdminOrderSerializer):
    lines = OrderLineSerializer(many=True, read_only=True)

    class Meta(AdminOrderSerializer.Meta):
        fields = AdminOrderSerializer.Meta.fields + ('lines',)


class CustomerSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    username = serializers.CharField()
    email = serializers.EmailField()
    orders_count = serializers.IntegerField()
    total_spent = serializers.DecimalField(max_digits=12, decimal_places=2)


class CustomerOrderSerializer(OrderSerializer):
    lines_count = serializers.IntegerField(read_only=True)

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ('lines_count',)


class FavoriteEntrySerializer(CatalogEntrySerializer):
    favorite_id = serializers.IntegerField()
