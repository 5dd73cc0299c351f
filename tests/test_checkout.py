from decimal import Decimal

import pytest
from django.db import DatabaseError
from django.db.models.query import QuerySet
from rest_framework.exceptions import NotFound, ValidationError

from apps.shop.models import CartLine, Order, OrderLine
from apps.shop.services.cart import CartService
from apps.shop.services.checkout import CheckoutService
from perfume_store.exceptions import EmptyCart

pytestmark = pytest.mark.django_db

SHIPPING = {
    'name': 'Alice Martin',
    'phone': '+33 6 12 34 56 78',
    'address': '12 rue de la Paix',
    'city': 'Paris',
    'postal_code': '75002',
}


@pytest.fixture
def filled_cart(user, make_perfume, make_promotion):
    sauvage = make_perfume(name='Sauvage', brand='Dior', price='100.00', image_url='/img/sauvage.png')
    ck_one = make_perfume(name='CK One', brand='Calvin Klein', price='49.99')
    make_promotion(sauvage, 20)
    make_promotion(ck_one, 15)
    CartService().add_or_update(user.id, sauvage.id, 2)
    CartService().add_or_update(user.id, ck_one.id, 1)
    return sauvage, ck_one


def test_checkout_charges_captured_prices(user, filled_cart):
    order = CheckoutService().checkout(user.id, SHIPPING)

    assert order.total == Decimal('202.49')
    assert order.items_count == 2
    assert order.status == Order.Status.CONFIRMED
    assert order.full_name == 'Alice Martin'
    assert order.payment_mode == Order.PaymentMode.CASH_ON_DELIVERY

    lines = list(order.lines.order_by('id'))
    assert [(l.name, l.order_snapshot_price, l.quantity, l.total_item) for l in lines] == [
        ('Sauvage', Decimal('80.00'), 2, Decimal('160.00')),
        ('CK One', Decimal('42.49'), 1, Decimal('42.49')),
    ]
    assert sum(l.total_item for l in lines) == order.total
    assert lines[0].image_url == '/img/sauvage.png'


def test_checkout_clears_the_cart(user, filled_cart):
    CheckoutService().checkout(user.id, SHIPPING)

    assert not CartLine.objects.filter(user=user).exists()


def test_checkout_ignores_promotion_changes_after_add(user, filled_cart):
    sauvage, ck_one = filled_cart
    sauvage.promotions.update(is_active=False)
    ck_one.price = Decimal('10.00')
    ck_one.save()

    order = CheckoutService().checkout(user.id, SHIPPING)

    assert order.total == Decimal('202.49')


def test_order_lines_survive_catalog_changes(user, filled_cart):
    sauvage, _ = filled_cart
    order = CheckoutService().checkout(user.id, SHIPPING)

    sauvage.delete()

    line = OrderLine.objects.get(order=order, name='Sauvage')
    assert line.order_snapshot_price == Decimal('80.00')
    assert line.perfume_id is not None


def test_checkout_with_empty_cart_fails(user):
    with pytest.raises(EmptyCart):
        CheckoutService().checkout(user.id, SHIPPING)

    assert not Order.objects.exists()


@pytest.mark.parametrize('missing', ['name', 'phone', 'address', 'city'])
def test_checkout_requires_shipping_fields(user, filled_cart, missing):
    shipping = {k: v for k, v in SHIPPING.items() if k != missing}

    with pytest.raises(ValidationError):
        CheckoutService().checkout(user.id, shipping)

    assert not Order.objects.exists()
    assert CartLine.objects.filter(user=user).count() == 2


def test_checkout_rejects_unknown_payment_mode(user, filled_cart):
    with pytest.raises(ValidationError):
        CheckoutService().checkout(user.id, dict(SHIPPING, payment_mode='bitcoin'))


def test_checkout_unknown_user_is_not_found(user):
    with pytest.raises(NotFound):
        CheckoutService().checkout(user.id + 100, SHIPPING)


def test_checkout_rolls_back_when_writing_lines_fails(user, filled_cart, monkeypatch):
    def broken_bulk_create(self, objs, *args, **kwargs):
        raise DatabaseError('disk full')

    monkeypatch.setattr(QuerySet, 'bulk_create', broken_bulk_create)

    with pytest.raises(DatabaseError):
        CheckoutService().checkout(user.id, SHIPPING)

    assert not Order.objects.exists()
    assert CartLine.objects.filter(user=user).count() == 2


def test_second_checkout_finds_an_empty_cart(user, filled_cart):
    CheckoutService().checkout(user.id, SHIPPING)

    with pytest.raises(EmptyCart):
        CheckoutService().checkout(user.id, SHIPPING)

    assert Order.objects.count() == 1


def test_checkout_does_not_touch_stock(user, filled_cart):
    sauvage, _ = filled_cart

    CheckoutService().checkout(user.id, SHIPPING)

    sauvage.refresh_from_db()
    assert sauvage.stock == 10


def test_checkout_locks_only_the_cart_rows(user):
    query = CheckoutService().locked_cart(user.id).query

    assert query.select_for_update
    assert query.select_for_update_of == ('self',)
