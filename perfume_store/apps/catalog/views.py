import logging

from django.db import transaction
from rest_framework.decorators import api_view
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Perfume, Promotion
from .serializers import CatalogEntrySerializer, PerfumeSerializer, PromotionSerializer
from .services.listing import CatalogService

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────
#  Customer catalog
# ─────────────────────────────────────────
@api_view(['GET'])
def perfume_list(request):
    entries = CatalogService().catalog(category=request.query_params.get('category'))
    return Response(CatalogEntrySerializer(entries, many=True).data)


@api_view(['GET'])
def new_arrivals(request):
    entries = CatalogService().new_arrivals()
    return Response(CatalogEntrySerializer(entries, many=True).data)


@api_view(['GET'])
def trending(request):
    entries = CatalogService().trending()
    return Response(CatalogEntrySerializer(entries, many=True).data)


@api_view(['GET'])
def similar(request, perfume_id):
    entries = CatalogService().similar(perfume_id)
    return Response(CatalogEntrySerializer(entries, many=True).data)


# ─────────────────────────────────────────
#  Admin — perfumes
# ─────────────────────────────────────────
def get_perfume(perfume_id):
    perfume = Perfume.objects.filter(id=perfume_id).first()
    if not perfume:
        raise NotFound('Perfume not found')
    return perfume


class AdminPerfumeListView(APIView):

    def get(self, request):
        perfumes = Perfume.objects.order_by('-id')
        return Response(PerfumeSerializer(perfumes, many=True).data)

    def post(self, request):
        serializer = PerfumeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        perfume = serializer.save()
        logger.info("ADMIN    — perfume created: %s (%s)", perfume.id, perfume)
        return Response(serializer.data, status=201)


class AdminPerfumeDetailView(APIView):

    def get(self, request, perfume_id):
        return Response(PerfumeSerializer(get_perfume(perfume_id)).data)

    def put(self, request, perfume_id):
        perfume = get_perfume(perfume_id)
        serializer = PerfumeSerializer(perfume, data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info("ADMIN    — perfume updated: %s", perfume_id)
        return Response(serializer.data)

    def delete(self, request, perfume_id):
        perfume = get_perfume(perfume_id)
        # Promotions, cart lines and favorites go with it; order lines are snapshots
        perfume.delete()
        logger.info("ADMIN    — perfume deleted: %s", perfume_id)
        return Response(status=204)


# ─────────────────────────────────────────
#  Admin — promotions
# ─────────────────────────────────────────
def get_promotion(promotion_id):
    promotion = Promotion.objects.select_related('perfume').filter(id=promotion_id).first()
    if not promotion:
        raise NotFound('Promotion not found')
    return promotion


class AdminPromotionListView(APIView):

    def get(self, request):
        promotions = Promotion.objects.select_related('perfume').order_by('-created_at', '-id')
        return Response(PromotionSerializer(promotions, many=True).data)

    def post(self, request):
        serializer = PromotionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            promotion = serializer.save()
        logger.info(
            "ADMIN    — promotion created: %s | perfume: %s | -%d%% | %s → %s",
            promotion.id, promotion.perfume_id, promotion.discount_percentage,
            promotion.start_date, promotion.end_date,
        )
        return Response(serializer.data, status=201)


class AdminPromotionDetailView(APIView):

    def put(self, request, promotion_id):
        promotion = get_promotion(promotion_id)
        serializer = PromotionSerializer(promotion, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info("ADMIN    — promotion updated: %s", promotion_id)
        return Response(serializer.data)

    def delete(self, request, promotion_id):
        get_promotion(promotion_id).delete()
        logger.info("ADMIN    — promotion deleted: %s", promotion_id)
        return Response(status=204)
