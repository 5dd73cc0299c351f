import logging

from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.catalog.serializers import CatalogEntrySerializer
from .serializers import (
    AdminOrderDetailSerializer,
    AdminOrderSerializer,
    CartAddSerializer,
    CartLineSerializer,
    PricedCartLineSerializer,
    CheckoutSerializer,
    CustomerOrderSerializer,
    CustomerSummarySerializer,
    FavoriteEntrySerializer,
    FavoriteInputSerializer,
    OrderFilterSerializer,
    OrderSerializer,
    OrderStatusSerializer,
)
from .services.cart import CartService
from .services.checkout import CheckoutService
from .services.favorites import FavoriteService
from .services.orders import OrderService
from .services.recommendations import PurchaseHistoryRecommendations

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────
#  Cart
# ─────────────────────────────────────────
class CartAddView(APIView):

    def post(self, request):
        payload = CartAddSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data

        logger.info("REQUEST  — cart add | user: %s | perfume: %s | qty: %s", data['user_id'], data['item_id'], data['quantity'])

        line = CartService().add_or_update(
            user_id=data['user_id'],
            perfume_id=data['item_id'],
            quantity=data['quantity'],
            client_price=data.get('client_supplied_price'),
        )
        return Response(CartLineSerializer(line).data)


class CartView(APIView):

    def get(self, request, user_id):
        lines = CartService().lines(user_id)
        return Response(PricedCartLineSerializer(lines, many=True).data)


class CartLineDeleteView(APIView):

    def delete(self, request, user_id, line_id):
        CartService().remove_line(user_id, line_id)
        return Response(status=204)


# ─────────────────────────────────────────
#  Checkout & orders
# ─────────────────────────────────────────
@api_view(['POST'])
def checkout(request):
    payload = CheckoutSerializer(data=request.data)
    payload.is_valid(raise_exception=True)
    user_id = payload.validated_data['user_id']

    logger.info("REQUEST  — checkout | user: %s", user_id)

    order = CheckoutService().checkout(user_id, request.data)
    return Response({'order_id': order.id, 'total': str(order.total)}, status=201)


class OrderHistoryView(APIView):

    def get(self, request, user_id):
        orders = OrderService().for_user(user_id)
        return Response(OrderSerializer(orders, many=True).data)


class OrderCancelView(APIView):

    def delete(self, request, user_id, order_id):
        OrderService().cancel(user_id, order_id)
        return Response({'message': 'Order cancelled'})


# ─────────────────────────────────────────
#  Favorites & recommendations
# ─────────────────────────────────────────
class FavoriteListView(APIView):

    def get(self, request, user_id):
        entries = FavoriteService().for_user(user_id)
        return Response(FavoriteEntrySerializer(entries, many=True).data)


@api_view(['POST'])
def favorite_add(request):
    payload = FavoriteInputSerializer(data=request.data)
    payload.is_valid(raise_exception=True)
    favorite = FavoriteService().add(**payload.validated_data)
    return Response({'id': favorite.id, 'message': 'Added to favorites'}, status=201)


class FavoriteDetailView(APIView):

    def get(self, request, user_id, perfume_id):
        return Response({'is_favorite': FavoriteService().is_favorite(user_id, perfume_id)})

    def delete(self, request, user_id, perfume_id):
        FavoriteService().remove(user_id, perfume_id)
        return Response(status=204)


@api_view(['GET'])
def favorite_recommendations(request, user_id):
    entries = FavoriteService().recommendations(user_id)
    return Response(CatalogEntrySerializer(entries, many=True).data)


@api_view(['GET'])
def purchase_history_recommendations(request, user_id):
    entries = PurchaseHistoryRecommendations().for_user(user_id)
    return Response(CatalogEntrySerializer(entries, many=True).data)


# ─────────────────────────────────────────
#  Admin — orders & customers
# ─────────────────────────────────────────
class AdminOrderListView(APIView):

    def get(self, request):
        filters = OrderFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        orders = OrderService().admin_orders(**filters.validated_data)
        return Response(AdminOrderSerializer(orders, many=True).data)


class AdminOrderDetailView(APIView):

    def get(self, request, order_id):
        order = OrderService().detail(order_id)
        return Response(AdminOrderDetailSerializer(order).data)

    def put(self, request, order_id):
        payload = OrderStatusSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        order = OrderService().set_status(order_id, payload.validated_data['status'])
        return Response(OrderSerializer(order).data)


class AdminCustomerListView(APIView):

    def get(self, request):
        customers = OrderService().customers()
        return Response(CustomerSummarySerializer(customers, many=True).data)


class AdminCustomerDetailView(APIView):

    def get(self, request, user_id):
        customer, orders = OrderService().customer(user_id)
        return Response({
            'customer': CustomerSummarySerializer(customer).data,
            'orders': CustomerOrderSerializer(orders, many=True).data,
        })
