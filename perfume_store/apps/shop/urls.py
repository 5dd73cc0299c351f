from django.urls import path
from . import views

urlpatterns = [
    path('cart/', views.CartAddView.as_view(), name='cart-add'),
    path('cart/<int:user_id>/', views.CartView.as_view(), name='cart-detail'),
    path('cart/<int:user_id>/lines/<int:line_id>/', views.CartLineDeleteView.as_view(), name='cart-line'),
    path('checkout/', views.checkout, name='checkout'),
    path('orders/<int:user_id>/', views.OrderHistoryView.as_view(), name='order-history'),
    path('orders/<int:user_id>/<int:order_id>/', views.OrderCancelView.as_view(), name='order-cancel'),
    path('favorites/', views.favorite_add, name='favorite-add'),
    path('favorites/<int:user_id>/', views.FavoriteListView.as_view(), name='favorite-list'),
    path('favorites/<int:user_id>/<int:perfume_id>/', views.FavoriteDetailView.as_view(), name='favorite-detail'),
    path('recommendations/favorites/<int:user_id>/', views.favorite_recommendations, name='recommendations-favorites'),
    path('recommendations/purchase-history/<int:user_id>/', views.purchase_history_recommendations, name='recommendations-purchase-history'),
    path('admin/orders/', views.AdminOrderListView.as_view(), name='admin-order-list'),
    path('admin/orders/<int:order_id>/', views.AdminOrderDetailView.as_view(), name='admin-order-detail'),
    path('admin/customers/', views.AdminCustomerListView.as_view(), name='admin-customer-list'),
    path('admin/customers/<int:user_id>/', views.AdminCustomerDetailView.as_view(), name='admin-customer-detail'),
]
