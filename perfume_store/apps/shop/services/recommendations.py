import logging

from django.db import DEFAULT_DB_ALIAS
from django.db.models import Q

from apps.catalog.models import Perfume
from apps.catalog.services.listing import CatalogEntry, running_promotions_prefetch
from apps.catalog.services.pricing import quote, today
from ..models import CartLine, OrderLine
from .lookups import require_user

logger = logging.getLogger(__name__)

RECOMMENDATIONS_LIMIT = 5


class PurchaseHistoryRecommendations:
    """
    Perfumes the user already showed buying intent for: anything in their
    cart or in one of their past orders, still in stock, in random order.
    """

    def __init__(self, using=DEFAULT_DB_ALIAS):
        self.using = using

    def for_user(self, user_id, limit=RECOMMENDATIONS_LIMIT, reference_date=None):
        reference_date = reference_date or today()
        require_user(user_id, self.using)

        in_cart = CartLine.objects.using(self.using).filter(user_id=user_id).values('perfume_id')
        ordered = (
            OrderLine.objects.using(self.using)
            .filter(order__user_id=user_id, perfume_id__isnull=False)
            .values('perfume_id')
        )
        perfumes = (
            Perfume.objects.using(self.using)
            .filter(Q(id__in=in_cart) | Q(id__in=ordered), stock__gt=0)
            .prefetch_related(running_promotions_prefetch(reference_date, self.using))
            .order_by('?')[:limit]
        )
        entries = [CatalogEntry(quote(perfume, reference_date=reference_date)) for perfume in perfumes]
        logger.debug("RECOMMEND — user: %s | purchase history | %d perfume(s)", user_id, len(entries))
        return entries
