import logging

from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction

from apps.catalog.services.listing import CatalogEntry, running_promotions_prefetch
from apps.catalog.services.pricing import quote, today
from perfume_store.exceptions import Conflict
from ..models import Favorite
from .lookups import require_perfume, require_user

logger = logging.getLogger(__name__)

RECOMMENDATIONS_LIMIT = 5


class FavoriteService:

    def __init__(self, using=DEFAULT_DB_ALIAS):
        self.using = using

    def _favorites(self, user_id):
        return Favorite.objects.using(self.using).filter(user_id=user_id)

    def add(self, user_id, perfume_id):
        require_user(user_id, self.using)
        require_perfume(perfume_id, self.using)
        if self._favorites(user_id).filter(perfume_id=perfume_id).exists():
            raise Conflict('Already in favorites.')
        try:
            with transaction.atomic(using=self.using):
                favorite = Favorite.objects.using(self.using).create(user_id=user_id, perfume_id=perfume_id)
        except IntegrityError:
            # Lost a race with an identical request
            raise Conflict('Already in favorites.')
        logger.info("FAVORITE — user: %s | perfume: %s added", user_id, perfume_id)
        return favorite

    def remove(self, user_id, perfume_id):
        deleted, _ = self._favorites(user_id).filter(perfume_id=perfume_id).delete()
        logger.info("FAVORITE — user: %s | perfume: %s removed (%d row)", user_id, perfume_id, deleted)
        return bool(deleted)

    def is_favorite(self, user_id, perfume_id):
        return self._favorites(user_id).filter(perfume_id=perfume_id).exists()

    def for_user(self, user_id, reference_date=None):
        """Wishlist newest first, priced like the catalog (out-of-stock included)."""
        reference_date = reference_date or today()
        require_user(user_id, self.using)
        favorites = (
            self._favorites(user_id)
            .select_related('perfume')
            .prefetch_related(running_promotions_prefetch(reference_date, self.using, 'perfume__promotions'))
            .order_by('-created_at', '-id')
        )
        entries = []
        for fav in favorites:
            entry = CatalogEntry(quote(fav.perfume, reference_date=reference_date))
            entry.favorite_id = fav.id
            entries.append(entry)
        return entries

    def recommendations(self, user_id, limit=RECOMMENDATIONS_LIMIT, reference_date=None):
        """A random handful of the user's favorites that are in stock."""
        reference_date = reference_date or today()
        require_user(user_id, self.using)
        favorites = (
            self._favorites(user_id)
            .filter(perfume__stock__gt=0)
            .select_related('perfume')
            .prefetch_related(running_promotions_prefetch(reference_date, self.using, 'perfume__promotions'))
            .order_by('?')[:limit]
        )
        return [CatalogEntry(quote(fav.perfume, reference_date=reference_date)) for fav in favorites]
