from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework import status

from profiles.models import Profile
from ratings.models import Rating
from stores.models import Store
from stores.services import average_of


class BaseInfoAPIView(APIView):
    """
    GET /api/base-info/

    Returns platform-wide aggregate statistics:
    - user_count: total number of profiles
    - store_count: total number of stores
    - rating_count: total number of ratings
    - average_rating: average score across all ratings (rounded to 1 decimal)
    - store_owner_count: number of profiles with role="store_owner"

    Authentication: required
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        """
        Compute and return the aggregate counters. If there are no ratings,
        average_rating is 0 (not null).
        """
        scores = list(Rating.objects.values_list("rating", flat=True))
        data = {
            "user_count": Profile.objects.count(),
            "store_count": Store.objects.count(),
            "rating_count": len(scores),
            "average_rating": average_of(scores),
            "store_owner_count": Profile.objects.filter(role=Profile.Role.STORE_OWNER).count(),
        }
        return Response(data, status=status.HTTP_200_OK)
