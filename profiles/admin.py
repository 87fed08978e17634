from django.contrib import admin
from .models import Profile

@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """
    Profile-Liste mit User-ID, Name, E-Mail und Rolle.
    """
    list_display = ("user_id_display", "name", "email_display", "role", "updated_at")
    list_select_related = ("user",)
    search_fields = ("name", "address", "user__email", "role")
    list_filter = ("role",)
    ordering = ("name", "user_id")
    autocomplete_fields = ("user",)
    readonly_fields = ("updated_at",)

    def user_id_display(self, obj):
        return obj.user_id
    user_id_display.short_description = "user id"
    user_id_display.admin_order_field = "user__id"

    def email_display(self, obj):
        return obj.email
    email_display.short_description = "email"
    email_display.admin_order_field = "user__email"
