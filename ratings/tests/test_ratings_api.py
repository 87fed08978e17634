from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient, APITestCase

from profiles.models import Profile
from ratings.models import Rating
from stores.models import Store

User = get_user_model()


def make_profile(email, role=Profile.Role.USER):
    user = User.objects.create_user(username=email, email=email, password="Pass#1234")
    return Profile.objects.create(user=user, name="Profile Holder Long Name", address="Somewhere 1", role=role)


def client_for(user):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION="Token " + Token.objects.create(user=user).key)
    return client


class RatingSubmitTests(APITestCase):
    def setUp(self):
        self.url = reverse("rating-list")
        self.rater = make_profile("rater@mail.de")
        self.other = make_profile("other@mail.de")
        self.store = Store.objects.create(name="Cafe", email="cafe@store.de", address="Bean Street 1")
        Rating.objects.create(user=self.other, store=self.store, rating=1)

        self.client_rater = client_for(self.rater.user)

    def test_first_submission_creates_rating(self):
        resp = self.client_rater.post(self.url, {"store": self.store.id, "rating": 3}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data["rating"]["rating"], 3)
        self.assertEqual(resp.data["rating"]["user"], self.rater.pk)
        self.assertEqual(resp.data["store"]["total_ratings"], 2)
        self.assertEqual(resp.data["store"]["average_rating"], 2.0)

    def test_resubmission_overwrites_instead_of_adding(self):
        resp = self.client_rater.post(self.url, {"store": self.store.id, "rating": 3}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        first_id = resp.data["rating"]["id"]

        resp = self.client_rater.post(self.url, {"store": self.store.id, "rating": 5}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["rating"]["id"], first_id)
        self.assertEqual(resp.data["rating"]["rating"], 5)

        # one rating before, exactly one more after both submissions
        self.assertEqual(resp.data["store"]["total_ratings"], 2)
        self.assertEqual(resp.data["store"]["average_rating"], 3.0)
        self.assertEqual(Rating.objects.get(user=self.rater, store=self.store).rating, 5)

    def test_score_out_of_range_400(self):
        for score in (0, 6, -1):
            resp = self.client_rater.post(self.url, {"store": self.store.id, "rating": score}, format="json")
            self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertIn("rating", resp.data)
        self.assertFalse(Rating.objects.filter(user=self.rater).exists())

    def test_score_not_integer_400(self):
        resp = self.client_rater.post(self.url, {"store": self.store.id, "rating": "great"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_store_404(self):
        resp = self.client_rater.post(self.url, {"store": 999999, "rating": 4}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_identity_without_profile_forbidden(self):
        bare = User.objects.create_user(username="bare@mail.de", email="bare@mail.de", password="Pass#1234")
        resp = client_for(bare).post(self.url, {"store": self.store.id, "rating": 4}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

    def test_unauthenticated_401(self):
        resp = APIClient().post(self.url, {"store": self.store.id, "rating": 4}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)


class RatingListTests(APITestCase):
    def setUp(self):
        self.url = reverse("rating-list")
        self.rater = make_profile("rater@mail.de")
        self.other = make_profile("other@mail.de")
        self.cafe = Store.objects.create(name="Cafe", email="cafe@store.de", address="Bean Street 1")
        self.bar = Store.objects.create(name="Bar", email="bar@store.de", address="Tap Road 2")
        Rating.objects.create(user=self.rater, store=self.cafe, rating=2)
        Rating.objects.create(user=self.rater, store=self.bar, rating=5)
        Rating.objects.create(user=self.other, store=self.cafe, rating=4)

        self.client_rater = client_for(self.rater.user)

    def test_filter_by_store(self):
        resp = self.client_rater.get(self.url, {"store_id": self.cafe.id})
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(len(resp.data), 2)
        self.assertTrue(all(r["store"] == self.cafe.id for r in resp.data))

    def test_filter_by_user_and_order_by_rating(self):
        resp = self.client_rater.get(self.url, {"user_id": self.rater.pk, "ordering": "-rating"})
        self.assertEqual([r["rating"] for r in resp.data], [5, 2])

    def test_invalid_ordering_400(self):
        resp = self.client_rater.get(self.url, {"ordering": "user"})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_invalid_store_id_400(self):
        resp = self.client_rater.get(self.url, {"store_id": "x"})
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)


class RatingDetailTests(APITestCase):
    def setUp(self):
        self.rater = make_profile("rater@mail.de")
        self.other = make_profile("other@mail.de")
        self.store = Store.objects.create(name="Cafe", email="cafe@store.de", address="Bean Street 1")
        self.rating = Rating.objects.create(user=self.rater, store=self.store, rating=2)
        self.url = reverse("rating-detail", kwargs={"pk": self.rating.pk})

        self.client_rater = client_for(self.rater.user)
        self.client_other = client_for(self.other.user)

    def test_get_rating(self):
        resp = self.client_other.get(self.url)
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["rating"], 2)

    def test_rater_can_patch(self):
        resp = self.client_rater.patch(self.url, {"rating": 4}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["rating"]["rating"], 4)
        self.assertEqual(resp.data["store"]["average_rating"], 4.0)
        self.assertEqual(resp.data["store"]["total_ratings"], 1)

    def test_other_cannot_patch(self):
        resp = self.client_other.patch(self.url, {"rating": 5}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.rating.refresh_from_db()
        self.assertEqual(self.rating.rating, 2)

    def test_patch_invalid_score_400(self):
        resp = self.client_rater.patch(self.url, {"rating": 9}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_rater_can_delete(self):
        resp = self.client_rater.delete(self.url)
        self.assertEqual(resp.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Rating.objects.filter(pk=self.rating.pk).exists())

    def test_other_cannot_delete(self):
        resp = self.client_other.delete(self.url)
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Rating.objects.filter(pk=self.rating.pk).exists())
