"""Django signals for cache invalidation.

The ORM store saves the event row after every seat or booking change, so
watching the event model is enough to keep catalog reads fresh.
"""

import logging

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from boxoffice import cache_keys
from boxoffice.models import Event

logger = logging.getLogger(__name__)


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate caches when an event is saved or deleted."""
    cache.delete_many(cache_keys.for_event(instance.pk))
    logger.debug("Invalidated catalog cache for event %s", instance.pk)
