from datetime import timedelta
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from apps.catalog.models import Perfume, Promotion
from apps.catalog.services.pricing import today


@pytest.fixture
def day():
    return today()


@pytest.fixture
def api():
    return APIClient()


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username='alice', email='alice@example.com', password='x')


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(username='bob', email='bob@example.com', password='x')


@pytest.fixture
def make_perfume(db):
    def make(name='Sauvage', brand='Dior', category='men', price='100.00', stock=10, **extra):
        return Perfume.objects.create(
            name=name, brand=brand, category=category, price=Decimal(price), stock=stock, **extra
        )
    return make


@pytest.fixture
def make_promotion(db, day):
    def make(perfume, discount, start=None, end=None, is_active=True, description=''):
        return Promotion.objects.create(
            perfume=perfume,
            discount_percentage=discount,
            start_date=start or day - timedelta(days=1),
            end_date=end or day + timedelta(days=1),
            is_active=is_active,
            description=description,
        )
    return make
