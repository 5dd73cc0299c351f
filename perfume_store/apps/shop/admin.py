from django.contrib import admin
from .models import CartLine, Favorite, Order, OrderLine


class OrderLineInline(admin.TabularInline):
    model = OrderLine
    extra = 0
    readonly_fields = ('perfume_id', 'name', 'brand', 'image_url', 'order_snapshot_price', 'quantity', 'total_item')


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'full_name', 'total', 'items_count', 'status', 'created_at')
    list_filter = ('status', 'payment_mode', 'created_at')
    search_fields = ('full_name', 'phone', 'city', 'user__email')
    readonly_fields = ('total', 'items_count', 'created_at')
    inlines = [OrderLineInline]


@admin.register(CartLine)
class CartLineAdmin(admin.ModelAdmin):
    list_display = ('user', 'perfume', 'quantity', 'cart_snapshot_price', 'updated_at')
    readonly_fields = ('cart_snapshot_price',)


@admin.register(Favorite)
class FavoriteAdmin(admin.ModelAdmin):
    list_display = ('user', 'perfume', 'created_at')
