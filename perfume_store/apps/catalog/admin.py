from django.contrib import admin
from .models import Perfume, Promotion


class PromotionInline(admin.TabularInline):
    model = Promotion
    extra = 0
    readonly_fields = ('created_at',)


@admin.register(Perfume)
class PerfumeAdmin(admin.ModelAdmin):
    list_display = ('name', 'brand', 'category', 'price', 'stock', 'created_at')
    list_filter = ('category',)
    search_fields = ('name', 'brand')
    inlines = [PromotionInline]


@admin.register(Promotion)
class PromotionAdmin(admin.ModelAdmin):
    list_display = ('perfume', 'discount_percentage', 'start_date', 'end_date', 'is_active')
    list_filter = ('is_active', 'start_date', 'end_date')
    search_fields = ('perfume__name', 'perfume__brand', 'description')
