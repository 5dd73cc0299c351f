import logging

from django.db import DEFAULT_DB_ALIAS
from django.db.models import Prefetch

from ..models import Perfume, Promotion
from .pricing import quote, today

logger = logging.getLogger(__name__)

NEW_ARRIVALS_LIMIT = 10
TRENDING_LIMIT = 8
SIMILAR_LIMIT = 5

# Stock level treated as "nothing sold yet" when scoring popularity
POPULARITY_BASELINE = 100


def running_promotions(reference_date, using=DEFAULT_DB_ALIAS):
    return Promotion.objects.using(using).filter(
        is_active=True,
        start_date__lte=reference_date,
        end_date__gte=reference_date,
    )


def running_promotions_prefetch(reference_date, using=DEFAULT_DB_ALIAS, lookup='promotions'):
    return Prefetch(
        lookup,
        queryset=running_promotions(reference_date, using).order_by('id'),
        to_attr='running_promotions',
    )


class CatalogEntry:
    """A perfume as customers see it: stock-filtered and priced."""

    def __init__(self, price_quote, popularity_score=None):
        self.quote = price_quote
        self.perfume = price_quote.perfume
        self.popularity_score = popularity_score

    @property
    def promotion(self):
        return self.quote.promotion

    @property
    def prix_final(self):
        return self.quote.live_price

    @property
    def has_active_promotion(self):
        return self.quote.has_active_promotion


class CatalogService:
    """Customer-facing listings. Out-of-stock perfumes never appear here."""

    def __init__(self, using=DEFAULT_DB_ALIAS):
        self.using = using

    def _in_stock(self, reference_date):
        return (
            Perfume.objects.using(self.using)
            .filter(stock__gt=0)
            .prefetch_related(running_promotions_prefetch(reference_date, self.using))
        )

    def _entries(self, perfumes, reference_date, with_popularity=False):
        entries = []
        for perfume in perfumes:
            score = POPULARITY_BASELINE - perfume.stock if with_popularity else None
            entries.append(CatalogEntry(quote(perfume, reference_date=reference_date), score))
        return entries

    def catalog(self, category=None, reference_date=None):
        reference_date = reference_date or today()
        perfumes = self._in_stock(reference_date)
        # Unknown categories are ignored rather than rejected
        if category in Perfume.Category.values:
            perfumes = perfumes.filter(category=category)
        perfumes = perfumes.order_by('-id')
        entries = self._entries(perfumes, reference_date)
        logger.debug("CATALOG — category: %s | %d perfume(s)", category or 'all', len(entries))
        return entries

    def new_arrivals(self, limit=NEW_ARRIVALS_LIMIT, reference_date=None):
        """Newest perfumes that have no running promotion."""
        reference_date = reference_date or today()
        promoted = running_promotions(reference_date, self.using).values('perfume_id')
        perfumes = self._in_stock(reference_date).exclude(id__in=promoted).order_by('-id')[:limit]
        return self._entries(perfumes, reference_date)

    def trending(self, limit=TRENDING_LIMIT, reference_date=None):
        """Lowest stock first, scored as POPULARITY_BASELINE minus stock."""
        reference_date = reference_date or today()
        perfumes = self._in_stock(reference_date).order_by('stock', '-id')[:limit]
        return self._entries(perfumes, reference_date, with_popularity=True)

    def similar(self, perfume_id, limit=SIMILAR_LIMIT, reference_date=None):
        reference_date = reference_date or today()
        perfumes = self._in_stock(reference_date).exclude(id=perfume_id).order_by('?')[:limit]
        return self._entries(perfumes, reference_date)
