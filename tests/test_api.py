from decimal import Decimal

import pytest
from django.db import DatabaseError
from django.db.models.query import QuerySet

from apps.catalog.models import Promotion
from apps.shop.models import Order

pytestmark = pytest.mark.django_db

SHIPPING = {
    'name': 'Alice Martin',
    'phone': '0612345678',
    'address': '12 rue de la Paix',
    'city': 'Paris',
}


@pytest.fixture
def sauvage(make_perfume, make_promotion):
    perfume = make_perfume(name='Sauvage', brand='Dior', price='100.00')
    make_promotion(perfume, 20, description='Autumn sale')
    return perfume


def test_catalog_endpoint_shows_final_price(api, sauvage):
    response = api.get('/api/perfumes/')

    assert response.status_code == 200
    [entry] = response.json()
    assert entry['id'] == sauvage.id
    assert entry['price'] == '100.00'
    assert entry['prix_final'] == '80.00'
    assert entry['discount_percentage'] == 20
    assert entry['promo_description'] == 'Autumn sale'
    assert entry['has_active_promotion'] is True


def test_trending_endpoint_carries_popularity(api, sauvage):
    [entry] = api.get('/api/perfumes/trending/').json()

    assert entry['popularity_score'] == 90


def test_cart_to_checkout_flow(api, user, sauvage, make_perfume, make_promotion):
    ck_one = make_perfume(name='CK One', brand='Calvin Klein', price='49.99')
    make_promotion(ck_one, 15)

    added = api.post('/api/cart/', {'user_id': user.id, 'item_id': sauvage.id, 'quantity': 2,
                                    'client_supplied_price': '1.00'}, format='json')
    api.post('/api/cart/', {'user_id': user.id, 'item_id': ck_one.id, 'quantity': 1}, format='json')

    assert added.status_code == 200
    assert added.json()['cart_snapshot_price'] == '80.00'
    cart = api.get('/api/cart/{}/'.format(user.id)).json()
    assert [line['line_total'] for line in cart] == ['160.00', '42.49']

    response = api.post('/api/checkout/', dict(SHIPPING, user_id=user.id), format='json')

    assert response.status_code == 201
    assert response.json()['total'] == '202.49'
    assert Order.objects.get(id=response.json()['order_id']).total == Decimal('202.49')
    assert api.get('/api/cart/{}/'.format(user.id)).json() == []


def test_checkout_empty_cart_is_a_bad_request(api, user):
    response = api.post('/api/checkout/', dict(SHIPPING, user_id=user.id), format='json')

    assert response.status_code == 400
    assert response.json() == {'error': 'Cart is empty.', 'code': 'empty_cart'}


def test_checkout_store_failure_is_a_server_error(api, user, sauvage, monkeypatch):
    api.post('/api/cart/', {'user_id': user.id, 'item_id': sauvage.id, 'quantity': 1}, format='json')

    def broken_bulk_create(self, objs, *args, **kwargs):
        raise DatabaseError('disk full')

    monkeypatch.setattr(QuerySet, 'bulk_create', broken_bulk_create)

    response = api.post('/api/checkout/', dict(SHIPPING, user_id=user.id), format='json')

    assert response.status_code == 500
    assert response.json()['code'] == 'store_failure'
    assert not Order.objects.exists()


def test_cart_rejects_zero_quantity(api, user, sauvage):
    response = api.post('/api/cart/', {'user_id': user.id, 'item_id': sauvage.id, 'quantity': 0}, format='json')

    assert response.status_code == 400
    body = response.json()
    assert body['code'] == 'invalid'
    assert 'quantity' in body['fields']


def test_unknown_perfume_is_not_found(api, user):
    response = api.post('/api/cart/', {'user_id': user.id, 'item_id': 999, 'quantity': 1}, format='json')

    assert response.status_code == 404
    assert response.json() == {'error': 'Perfume not found', 'code': 'not_found'}


def test_cancel_processing_order_is_a_conflict(api, user, sauvage):
    api.post('/api/cart/', {'user_id': user.id, 'item_id': sauvage.id, 'quantity': 1}, format='json')
    order_id = api.post('/api/checkout/', dict(SHIPPING, user_id=user.id), format='json').json()['order_id']
    api.put('/api/admin/orders/{}/'.format(order_id), {'status': 'processing'}, format='json')

    response = api.delete('/api/orders/{}/{}/'.format(user.id, order_id))

    assert response.status_code == 409
    assert response.json()['code'] == 'conflict'


def test_cancel_confirmed_order(api, user, sauvage):
    api.post('/api/cart/', {'user_id': user.id, 'item_id': sauvage.id, 'quantity': 1}, format='json')
    order_id = api.post('/api/checkout/', dict(SHIPPING, user_id=user.id), format='json').json()['order_id']

    response = api.delete('/api/orders/{}/{}/'.format(user.id, order_id))

    assert response.status_code == 200
    assert api.get('/api/orders/{}/'.format(user.id)).json() == []


def test_admin_cannot_set_cancelled_status(api, user, sauvage):
    api.post('/api/cart/', {'user_id': user.id, 'item_id': sauvage.id, 'quantity': 1}, format='json')
    order_id = api.post('/api/checkout/', dict(SHIPPING, user_id=user.id), format='json').json()['order_id']

    response = api.put('/api/admin/orders/{}/'.format(order_id), {'status': 'cancelled'}, format='json')

    assert response.status_code == 400
    assert Order.objects.get(id=order_id).status == Order.Status.CONFIRMED


def test_promotion_discount_out_of_range(api, sauvage, day):
    response = api.post('/api/admin/promotions/', {
        'perfume': sauvage.id,
        'discount_percentage': 95,
        'start_date': str(day),
        'end_date': str(day),
    }, format='json')

    assert response.status_code == 400
    assert response.json()['error'] == 'Discount must be between 1 and 90 percent.'
    assert Promotion.objects.filter(perfume=sauvage).count() == 1


def test_promotion_end_before_start(api, sauvage, day):
    response = api.post('/api/admin/promotions/', {
        'perfume': sauvage.id,
        'discount_percentage': 10,
        'start_date': '2025-06-10',
        'end_date': '2025-06-01',
    }, format='json')

    assert response.status_code == 400
    assert 'end_date' in response.json()['fields']


def test_promotion_created_then_shown_in_catalog(api, make_perfume, day):
    perfume = make_perfume(price='49.99')

    response = api.post('/api/admin/promotions/', {
        'perfume': perfume.id,
        'discount_percentage': 15,
        'start_date': str(day),
        'end_date': str(day),
    }, format='json')

    assert response.status_code == 201
    assert response.json()['perfume_name'] == perfume.name
    [entry] = api.get('/api/perfumes/').json()
    assert entry['prix_final'] == '42.49'


def test_admin_perfume_crud(api):
    created = api.post('/api/admin/perfumes/', {
        'name': 'Santal 33', 'brand': 'Le Labo', 'category': 'unisex', 'price': '180.00', 'stock': 7,
    }, format='json')
    assert created.status_code == 201
    perfume_id = created.json()['id']

    invalid = api.put('/api/admin/perfumes/{}/'.format(perfume_id), {
        'name': 'Santal 33', 'brand': 'Le Labo', 'category': 'kids', 'price': '180.00', 'stock': 7,
    }, format='json')
    assert invalid.status_code == 400

    assert api.delete('/api/admin/perfumes/{}/'.format(perfume_id)).status_code == 204
    assert api.get('/api/admin/perfumes/{}/'.format(perfume_id)).status_code == 404


def test_duplicate_favorite_is_a_conflict(api, user, sauvage):
    payload = {'user_id': user.id, 'perfume_id': sauvage.id}

    assert api.post('/api/favorites/', payload, format='json').status_code == 201
    response = api.post('/api/favorites/', payload, format='json')

    assert response.status_code == 409
    assert response.json() == {'error': 'Already in favorites.', 'code': 'conflict'}
    assert api.get('/api/favorites/{}/{}/'.format(user.id, sauvage.id)).json() == {'is_favorite': True}


def test_admin_customers_summary(api, user, sauvage):
    api.post('/api/cart/', {'user_id': user.id, 'item_id': sauvage.id, 'quantity': 3}, format='json')
    api.post('/api/checkout/', dict(SHIPPING, user_id=user.id), format='json')

    [customer] = api.get('/api/admin/customers/').json()
    detail = api.get('/api/admin/customers/{}/'.format(user.id)).json()

    assert customer['orders_count'] == 1
    assert customer['total_spent'] == '240.00'
    assert detail['orders'][0]['lines_count'] == 1


def test_promotion_update_keeps_discount_range(api, sauvage):
    promotion = sauvage.promotions.get()

    response = api.put('/api/admin/promotions/{}/'.format(promotion.id), {'discount_percentage': 95}, format='json')

    assert response.status_code == 400
    assert response.json()['error'] == 'Discount must be between 1 and 90 percent.'
    promotion.refresh_from_db()
    assert promotion.discount_percentage == 20


def test_promotion_cannot_move_to_another_perfume(api, sauvage, make_perfume):
    other = make_perfume(name='CK One')
    promotion = sauvage.promotions.get()

    response = api.put('/api/admin/promotions/{}/'.format(promotion.id), {'perfume': other.id}, format='json')

    assert response.status_code == 400
    assert 'perfume' in response.json()['fields']
    promotion.refresh_from_db()
    assert promotion.perfume_id == sauvage.id


def test_promotion_update_is_reflected_in_catalog(api, sauvage):
    promotion = sauvage.promotions.get()

    response = api.put('/api/admin/promotions/{}/'.format(promotion.id), {'discount_percentage': 30}, format='json')

    assert response.status_code == 200
    assert api.get('/api/perfumes/').json()[0]['prix_final'] == '70.00'


def test_promotion_delete_restores_base_price(api, sauvage):
    promotion = sauvage.promotions.get()

    response = api.delete('/api/admin/promotions/{}/'.format(promotion.id))

    assert response.status_code == 204
    [entry] = api.get('/api/perfumes/').json()
    assert entry['prix_final'] == '100.00'
    assert entry['has_active_promotion'] is False


def test_promotion_delete_unknown_is_not_found(api):
    response = api.delete('/api/admin/promotions/999/')

    assert response.status_code == 404
    assert response.json() == {'error': 'Promotion not found', 'code': 'not_found'}
