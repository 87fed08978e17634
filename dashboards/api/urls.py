from django.urls import path
from .views import RouteView, AdminDashboardView, StoreOwnerDashboardView, UserDashboardView

urlpatterns = [
    path("route/", RouteView.as_view(), name="route"),
    path("dashboard/admin/", AdminDashboardView.as_view(), name="dashboard-admin"),
    path("dashboard/store-owner/", StoreOwnerDashboardView.as_view(), name="dashboard-store-owner"),
    path("dashboard/user/", UserDashboardView.as_view(), name="dashboard-user"),
]
