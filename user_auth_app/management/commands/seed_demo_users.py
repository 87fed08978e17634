from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from rest_framework.authtoken.models import Token

from profiles.models import Profile
from stores.models import Store

DEMO_USERS = {
    Profile.Role.ADMIN: {
        "email": "admin@example.com",
        "password": "Admin#2024",
        "name": "Platform Administrator Account",
        "address": "1 Admin Plaza, Springfield",
    },
    Profile.Role.STORE_OWNER: {
        "email": "owner@example.com",
        "password": "Owner#2024",
        "name": "Demo Store Owner Account Name",
        "address": "42 Market Street, Springfield",
    },
    Profile.Role.USER: {
        "email": "user@example.com",
        "password": "User#2024x",
        "name": "Demo Regular User Account Name",
        "address": "7 Elm Road, Springfield",
    },
}

DEMO_STORE = {
    "name": "Springfield Corner Store",
    "email": "owner@example.com",
    "address": "42 Market Street, Springfield",
}


class Command(BaseCommand):
    help = "Create or update demo users (admin, store owner, user) and a demo store."

    def handle(self, *args, **options):
        User = get_user_model()

        # Store zuerst anlegen, damit die Owner-Zuweisung per E-Mail greift
        store, created = Store.objects.get_or_create(email=DEMO_STORE["email"], defaults=DEMO_STORE)
        if created:
            self.stdout.write(self.style.SUCCESS(f"Created store '{store.name}'"))

        for role, cfg in DEMO_USERS.items():
            u, created = User.objects.get_or_create(
                username=cfg["email"],
                defaults={"email": cfg["email"]},
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f"Created user '{u.email}'"))
            else:
                self.stdout.write(f"User '{u.email}' already exists")

            # set (or reset) password to the documented demo value
            u.set_password(cfg["password"])
            u.save(update_fields=["password"])

            # ensure profile with correct role (saving triggers store owner assignment)
            prof, _ = Profile.objects.get_or_create(
                user=u, defaults={"name": cfg["name"], "address": cfg["address"], "role": role}
            )
            if prof.role != role:
                prof.role = role
                prof.save(update_fields=["role", "updated_at"])

            token, _ = Token.objects.get_or_create(user=u)
            self.stdout.write(f"  → role={role}, token={token.key}")

        self.stdout.write(self.style.SUCCESS("Demo users ready."))
