from django.contrib import admin
from django.urls import include, path

from common.api.views import BaseInfoAPIView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/base-info/", BaseInfoAPIView.as_view(), name="base-info"),
    path("api/", include("user_auth_app.api.urls")),
    path("api/", include("profiles.api.urls")),
    path("api/", include("stores.api.urls")),
    path("api/", include("ratings.api.urls")),
    path("api/", include("dashboards.api.urls")),
]
