from django.urls import path
from .views import ProfileListView, ProfileView, ProfileRoleView

urlpatterns = [
    path("profiles/", ProfileListView.as_view(), name="profile-list"),
    path("profile/<int:pk>/", ProfileView.as_view(), name="profile"),
    path("profiles/<int:pk>/role/", ProfileRoleView.as_view(), name="profile-role"),
]
