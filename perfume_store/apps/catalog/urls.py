from django.urls import path
from . import views

urlpatterns = [
    path('perfumes/', views.perfume_list, name='perfume-list'),
    path('perfumes/new/', views.new_arrivals, name='perfume-new'),
    path('perfumes/trending/', views.trending, name='perfume-trending'),
    path('perfumes/<int:perfume_id>/similar/', views.similar, name='perfume-similar'),
    path('admin/perfumes/', views.AdminPerfumeListView.as_view(), name='admin-perfume-list'),
    path('admin/perfumes/<int:perfume_id>/', views.AdminPerfumeDetailView.as_view(), name='admin-perfume-detail'),
    path('admin/promotions/', views.AdminPromotionListView.as_view(), name='admin-promotion-list'),
    path('admin/promotions/<int:promotion_id>/', views.AdminPromotionDetailView.as_view(), name='admin-promotion-detail'),
]
