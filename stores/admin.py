from django.contrib import admin
from django.db.models import Avg, Count

from .models import Store


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    """
    Komfortable Verwaltung von Stores:
    - Owner-Name, Anzahl und Durchschnitt der Bewertungen als Spalten
    - Such-/Filterfelder
    """
    list_display = (
        "id",
        "name",
        "email",
        "owner_name",
        "total_ratings_display",
        "average_rating_display",
        "created_at",
    )
    list_select_related = ("owner",)
    search_fields = ("name", "email", "address", "owner__name")
    list_filter = ("created_at",)
    date_hierarchy = "created_at"
    ordering = ("name", "id")
    readonly_fields = ("created_at",)
    raw_id_fields = ("owner",)

    def get_queryset(self, request):
        # Kennzahlen direkt in der Liste berechnen (keine N+1 auf Ratings)
        qs = super().get_queryset(request)
        return qs.select_related("owner").annotate(
            _total_ratings=Count("ratings"),
            _average_rating=Avg("ratings__rating"),
        )

    def owner_name(self, obj):
        return obj.owner.name if obj.owner_id else ""
    owner_name.short_description = "owner"

    def total_ratings_display(self, obj):
        return getattr(obj, "_total_ratings", 0)
    total_ratings_display.short_description = "ratings"

    def average_rating_display(self, obj):
        v = getattr(obj, "_average_rating", None)
        return f"{v:.1f}" if v is not None else "-"
    average_rating_display.short_description = "avg rating"
