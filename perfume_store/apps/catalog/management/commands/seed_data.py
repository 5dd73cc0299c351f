import random
from decimal import Decimal
from datetime import timedelta
from django.core.management.base import BaseCommand
from django.db import transaction
from apps.catalog.models import Perfume, Promotion
from apps.catalog.services.pricing import today


PERFUMES = [
    ('Sauvage', 'Dior', 'men', '112.00', 25),
    ('Bleu de Chanel', 'Chanel', 'men', '129.00', 12),
    ('Acqua di Gio', 'Giorgio Armani', 'men', '95.50', 40),
    ('La Vie Est Belle', 'Lancôme', 'women', '104.90', 18),
    ('Coco Mademoiselle', 'Chanel', 'women', '139.00', 7),
    ('Black Opium', 'Yves Saint Laurent', 'women', '99.00', 30),
    ('J\'adore', 'Dior', 'women', '118.00', 0),
    ('CK One', 'Calvin Klein', 'unisex', '49.99', 60),
    ('Santal 33', 'Le Labo', 'unisex', '215.00', 5),
    ('Wood Sage & Sea Salt', 'Jo Malone', 'unisex', '75.00', 22),
]

DESCRIPTIONS = ['Holiday sale', 'Flash sale', 'Spring offer', 'Loyalty week', 'Clearance']


class Command(BaseCommand):
    help = 'Seed sample perfumes and promotions around today\'s date'

    def add_arguments(self, parser):
        parser.add_argument('--promotions', type=int, default=6, help='Number of promotions to create')
        parser.add_argument('--clear', action='store_true', help='Clear existing catalog data first')

    def handle(self, *args, **options):
        with transaction.atomic():
            if options['clear']:
                Promotion.objects.all().delete()
                Perfume.objects.all().delete()
                self.stdout.write(self.style.WARNING('Cleared existing catalog.'))

            perfumes = []
            for name, brand, category, price, stock in PERFUMES:
                perfume, _ = Perfume.objects.get_or_create(
                    name=name,
                    brand=brand,
                    defaults={'category': category, 'price': Decimal(price), 'stock': stock},
                )
                perfumes.append(perfume)
            self.stdout.write(f'Perfumes ready: {len(perfumes)}')

            # Windows start up to a week ago and last up to three weeks, so
            # some are running today and some have already ended
            reference = today()
            promotion_count = options['promotions']
            for _ in range(promotion_count):
                start = reference - timedelta(days=random.randint(0, 7))
                Promotion.objects.create(
                    perfume=random.choice(perfumes),
                    discount_percentage=random.choice([10, 15, 20, 25, 30]),
                    start_date=start,
                    end_date=start + timedelta(days=random.randint(3, 21)),
                    description=random.choice(DESCRIPTIONS),
                    is_active=random.random() > 0.2,
                )

        self.stdout.write(self.style.SUCCESS(f'Successfully created {promotion_count} promotions.'))
