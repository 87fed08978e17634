from django.urls import path
from .views import StoreListCreateAPIView, StoreDetailAPIView, StoreRatingsAPIView, MyStoreRatingAPIView

urlpatterns = [
    path("stores/", StoreListCreateAPIView.as_view(), name="store-list"),
    path("stores/<int:pk>/", StoreDetailAPIView.as_view(), name="store-detail"),
    path("stores/<int:pk>/ratings/", StoreRatingsAPIView.as_view(), name="store-ratings"),
    path("stores/<int:pk>/my-rating/", MyStoreRatingAPIView.as_view(), name="store-my-rating"),
]
