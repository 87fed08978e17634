from django.urls import path
from .views import (
    AdminUserCreateView,
    LoginView,
    LogoutView,
    PasswordChangeView,
    RegistrationView,
    SessionView,
)

urlpatterns = [
    path("registration/", RegistrationView.as_view(), name="registration"),
    path("login/", LoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("password/", PasswordChangeView.as_view(), name="password-change"),
    path("session/", SessionView.as_view(), name="session"),
    path("users/", AdminUserCreateView.as_view(), name="user-create"),
]
