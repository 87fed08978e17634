from django.urls import path
from .views import RatingListCreateAPIView, RatingDetailAPIView

urlpatterns = [
    path("ratings/", RatingListCreateAPIView.as_view(), name="rating-list"),
    path("ratings/<int:pk>/", RatingDetailAPIView.as_view(), name="rating-detail"),
]
