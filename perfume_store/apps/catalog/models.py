from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

MIN_DISCOUNT = 1
MAX_DISCOUNT = 90


class Perfume(models.Model):
    """Perfumes in the catalog."""

    class Category(models.TextChoices):
        MEN = 'men', 'Men'
        WOMEN = 'women', 'Women'
        UNISEX = 'unisex', 'Unisex'

    name = models.CharField(max_length=255)
    brand = models.CharField(max_length=255)
    category = models.CharField(max_length=20, choices=Category.choices)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    stock = models.PositiveIntegerField(default=0)
    description = models.TextField(blank=True)
    image_url = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'catalog_perfume'
        ordering = ['-id']
        indexes = [
            models.Index(fields=['category'], name='catalog_perfume_category_idx'),
            models.Index(fields=['stock'], name='catalog_perfume_stock_idx'),
        ]

    def __str__(self):
        return f"{self.brand} — {self.name}"

    @property
    def in_stock(self):
        return self.stock > 0


class Promotion(models.Model):
    """Time-windowed percentage discount on one perfume."""

    perfume = models.ForeignKey(Perfume, on_delete=models.CASCADE, related_name='promotions')
    discount_percentage = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_DISCOUNT), MaxValueValidator(MAX_DISCOUNT)],
    )
    start_date = models.DateField()
    end_date = models.DateField()
    is_active = models.BooleanField(default=True)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'catalog_promotion'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(
                fields=['perfume', 'is_active', 'start_date', 'end_date'],
                name='catalog_promo_running_idx',
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(discount_percentage__gte=MIN_DISCOUNT, discount_percentage__lte=MAX_DISCOUNT),
                name='catalog_promotion_discount_range',
            ),
        ]

    def __str__(self):
        return f"-{self.discount_percentage}% on {self.perfume_id} ({self.start_date} → {self.end_date})"

    def is_running_on(self, day):
        return self.is_active and self.start_date <= day <= self.end_date
