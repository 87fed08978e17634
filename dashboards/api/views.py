"""Dashboards API views.

GET /api/route/ answers which view a client may render for a path, based on
the session state. The three dashboard endpoints return the data each role's
dashboard shows; every request re-reads stores and ratings and re-computes
the aggregates.
"""

import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from common.filtering import filter_and_sort, parse_list_params
from profiles.api.permissions import IsAdminRole, IsStoreOwnerRole, IsUserRole
from profiles.api.serializers import ProfileSerializer
from profiles.services import fetch_all_profiles
from ratings.api.serializers import RaterDetailSerializer
from ratings.models import Rating
from ratings.services import fetch_store_ratings_with_rater_details, rating_distribution
from stores.api.serializers import RatedStoreSerializer
from stores.services import fetch_stores_with_ratings
from user_auth_app.session import SessionContext
from ..router import RoleRouter

logger = logging.getLogger(__name__)

USER_SEARCH_FIELDS = ("name", "email", "address")
USER_SORT_FIELDS = ("name", "email", "address", "role")
STORE_SEARCH_FIELDS = ("name", "email", "address")
STORE_SORT_FIELDS = ("name", "email", "address", "average_rating", "total_ratings")


# ----------------------------- helpers (module-level) -----------------------------

def _selected_store_id(params, stores):
    """Requested store_id if it is one of `stores`, else the first store's id."""
    owned_ids = [s["id"] for s in stores]
    v = params.get("store_id")
    if v:
        if not v.isdigit():
            raise ValidationError({"store_id": "Must be an integer."})
        if int(v) not in owned_ids:
            raise ValidationError({"store_id": "Not one of your stores."})
        return int(v)
    return owned_ids[0] if owned_ids else None


def _ratings_by_store_for(user_id) -> dict:
    """The user's own scores keyed by store id.

    Failures are logged and yield an empty mapping; the store list is still
    returned.
    """
    try:
        return dict(Rating.objects.filter(user_id=user_id).values_list("store_id", "rating"))
    except DatabaseError:
        logger.exception("Loading ratings of user %s failed", user_id)
        return {}


# --------------------------------------- views ---------------------------------------

class RouteView(APIView):
    """GET /api/route/?path=/admin -> {"state", "path", "view", "redirect"}."""

    permission_classes = [AllowAny]

    def get(self, request):
        path = request.query_params.get("path", "/")
        router = RoleRouter()
        with SessionContext(request) as session:
            router.bind(session)
            decision = router.resolve(path)
        data = {
            "state": router.state,
            "path": path,
            "view": decision.view,
            "redirect": decision.redirect,
        }
        return Response(data, status=status.HTTP_200_OK)


class AdminDashboardView(APIView):
    """GET /api/dashboard/admin/ -> totals plus filtered/sorted users and stores.

    Query params: `search`, `role` (users only), `sort_by`, `sort_order`.
    """

    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        params = parse_list_params(request.query_params, USER_SORT_FIELDS + STORE_SORT_FIELDS)

        users = ProfileSerializer(fetch_all_profiles(), many=True).data
        stores = RatedStoreSerializer(fetch_stores_with_ratings(), many=True).data

        store_sort = params["sort_by"] if params["sort_by"] in STORE_SORT_FIELDS else "name"
        data = {
            "total_users": len(users),
            "total_stores": len(stores),
            "total_ratings": sum(s["total_ratings"] for s in stores),
            "store_owners": [u for u in users if u["role"] == "store_owner"],
            "users": filter_and_sort(
                users,
                search=params["search"],
                search_fields=USER_SEARCH_FIELDS,
                role=params["role"],
                sort_by=params["sort_by"] if params["sort_by"] in USER_SORT_FIELDS else "name",
                sort_order=params["sort_order"],
            ),
            "stores": filter_and_sort(
                stores,
                search=params["search"],
                search_fields=STORE_SEARCH_FIELDS,
                sort_by=store_sort,
                sort_order=params["sort_order"],
            ),
        }
        return Response(data, status=status.HTTP_200_OK)


class StoreOwnerDashboardView(APIView):
    """GET /api/dashboard/store-owner/ -> owned stores, selected store's ratings
    with rater details and the rating distribution.

    Query param `store_id` selects one of the owned stores (default: first).
    """

    permission_classes = [IsAuthenticated, IsStoreOwnerRole]

    def get(self, request):
        stores = RatedStoreSerializer(fetch_stores_with_ratings(owner_id=request.user.id), many=True).data
        selected_id = _selected_store_id(request.query_params, stores)

        ratings = fetch_store_ratings_with_rater_details(selected_id) if selected_id else []
        data = {
            "stores": stores,
            "selected_store": next((s for s in stores if s["id"] == selected_id), None),
            "ratings": RaterDetailSerializer(ratings, many=True).data,
            "distribution": rating_distribution(r["rating"] for r in ratings),
        }
        return Response(data, status=status.HTTP_200_OK)


class UserDashboardView(APIView):
    """GET /api/dashboard/user/ -> all stores with aggregates and the caller's
    own rating per store. Query param `search` matches name or address.
    """

    permission_classes = [IsAuthenticated, IsUserRole]

    def get(self, request):
        stores = RatedStoreSerializer(fetch_stores_with_ratings(), many=True).data
        stores = filter_and_sort(
            stores,
            search=(request.query_params.get("search") or "").strip(),
            search_fields=("name", "address"),
        )
        own = _ratings_by_store_for(request.user.id)
        for s in stores:
            s["user_rating"] = own.get(s["id"])
        return Response({"stores": stores}, status=status.HTTP_200_OK)
