from django.contrib import admin

from .models import Rating


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    """
    Bewertungen mit Store, Rater und Score; nur der Score ist editierbar.
    """
    list_display = ("id", "store", "rater_name", "rating", "created_at", "updated_at")
    list_select_related = ("store", "user")
    list_filter = ("rating", "created_at")
    search_fields = ("store__name", "user__name", "user__user__email")
    ordering = ("-created_at", "-id")
    readonly_fields = ("user", "store", "created_at", "updated_at")

    def rater_name(self, obj):
        return obj.user.name if obj.user_id else ""
    rater_name.short_description = "rater"
