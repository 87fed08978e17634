"""Profile signal handlers.

Store ownership follows the profile role: when a profile is created with role
`store_owner`, or its role changes to `store_owner`, every store registered
under the identity's email is assigned to it. Saves that keep the role (e.g.
name or address edits) leave store ownership alone. When a profile stops
being a store owner, its stores are released so that a store's owner always
has role `store_owner`.
"""

import logging

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from stores.models import Store
from .models import Profile

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=Profile, dispatch_uid="profiles.remember_previous_role")
def remember_previous_role(sender, instance: Profile, **kwargs):
    instance._previous_role = (
        Profile.objects.filter(pk=instance.pk).values_list("role", flat=True).first()
        if instance.pk is not None
        else None
    )


@receiver(post_save, sender=Profile, dispatch_uid="profiles.assign_store_owner")
def assign_store_owner(sender, instance: Profile, created=False, **kwargs):
    previous = getattr(instance, "_previous_role", None)

    if instance.role == Profile.Role.STORE_OWNER:
        if not created and previous == Profile.Role.STORE_OWNER:
            return
        email = instance.email
        if not email:
            return
        assigned = Store.objects.filter(email__iexact=email).update(owner=instance)
        if assigned:
            logger.info("Assigned %d store(s) to store owner %s", assigned, instance.pk)
        return

    released = Store.objects.filter(owner=instance).update(owner=None)
    if released:
        logger.info("Released %d store(s) from profile %s (role=%s)", released, instance.pk, instance.role)
