from rest_framework import serializers

from .models import MAX_DISCOUNT, MIN_DISCOUNT, Perfume, Promotion

DISCOUNT_RANGE_MESSAGE = 'Discount must be between {} and {} percent.'.format(MIN_DISCOUNT, MAX_DISCOUNT)


class PerfumeSerializer(serializers.ModelSerializer):
    category = serializers.ChoiceField(
        choices=Perfume.Category.choices,
        error_messages={'invalid_choice': 'Invalid category (men, women or unisex).'},
    )

    class Meta:
        model = Perfume
        fields = ('id', 'name', 'brand', 'category', 'price', 'stock', 'description', 'image_url', 'created_at')
        read_only_fields = ('id', 'created_at')


class PromotionSerializer(serializers.ModelSerializer):
    discount_percentage = serializers.IntegerField(
        min_value=MIN_DISCOUNT,
        max_value=MAX_DISCOUNT,
        error_messages={'min_value': DISCOUNT_RANGE_MESSAGE, 'max_value': DISCOUNT_RANGE_MESSAGE},
    )
    perfume_name = serializers.CharField(source='perfume.name', read_only=True)
    perfume_brand = serializers.CharField(source='perfume.brand', read_only=True)

    class Meta:
        model = Promotion
        fields = (
            'id', 'perfume', 'perfume_name', 'perfume_brand', 'discount_percentage',
            'start_date', 'end_date', 'description', 'is_active', 'created_at',
        )
        read_only_fields = ('id', 'created_at')

    def validate(self, attrs):
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': 'End date must not be before start date.'})
        if self.instance is not None and 'perfume' in attrs and attrs['perfume'] != self.instance.perfume:
            raise serializers.ValidationError({'perfume': 'A promotion cannot be moved to another perfume.'})
        return attrs


class CatalogEntrySerializer(serializers.Serializer):
    """Perfume fields plus the resolved promotion, flat like the mobile app expects."""

    id = serializers.IntegerField(source='perfume.id')
    name = serializers.CharField(source='perfume.name')
    brand = serializers.CharField(source='perfume.brand')
    category = serializers.CharField(source='perfume.category')
    price = serializers.DecimalField(source='perfume.price', max_digits=10, decimal_places=2)
    stock = serializers.IntegerField(source='perfume.stock')
    description = serializers.CharField(source='perfume.description')
    image_url = serializers.CharField(source='perfume.image_url')
    promotion_id = serializers.IntegerField(source='promotion.id', default=None)
    discount_percentage = serializers.IntegerField(source='promotion.discount_percentage', default=None)
    start_date = serializers.DateField(source='promotion.start_date', default=None)
    end_date = serializers.DateField(source='promotion.end_date', default=None)
    promo_description = serializers.CharField(source='promotion.description', default=None)
    prix_final = serializers.DecimalField(max_digits=10, decimal_places=2)
    has_active_promotion = serializers.BooleanField()

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if instance.popularity_score is not None:
            data['popularity_score'] = instance.popularity_score
        return data
