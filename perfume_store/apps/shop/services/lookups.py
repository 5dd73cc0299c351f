from django.contrib.auth import get_user_model
from rest_framework.exceptions import NotFound

from apps.catalog.models import Perfume


def require_user(user_id, using):
    user = get_user_model().objects.using(using).filter(pk=user_id).first()
    if not user:
        raise NotFound('User not found')
    return user


def require_perfume(perfume_id, using):
    perfume = Perfume.objects.using(using).filter(pk=perfume_id).first()
    if not perfume:
        raise NotFound('Perfume not found')
    return perfume
