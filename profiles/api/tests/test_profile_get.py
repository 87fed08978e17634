from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient, APITestCase

from profiles.models import Profile

User = get_user_model()


class ProfileGetTests(APITestCase):
    def setUp(self):
        self.user_a = User.objects.create_user(username="anna@mail.de", email="anna@mail.de", password="Pass#1234")
        self.user_b = User.objects.create_user(username="ben@mail.de", email="ben@mail.de", password="Pass#1234")
        self.profile_a = Profile.objects.create(
            user=self.user_a, name="Anna Annabelle Andersson", address="Birkenweg 1, Berlin"
        )
        self.profile_b = Profile.objects.create(
            user=self.user_b, name="Benjamin Bartholomew Brown", address="Eichenweg 2, Hamburg",
            role=Profile.Role.STORE_OWNER,
        )

        self.client = APIClient()
        self.client.credentials(HTTP_AUTHORIZATION="Token " + Token.objects.create(user=self.user_a).key)

    def test_get_own_profile(self):
        url = reverse("profile", kwargs={"pk": self.user_a.id})
        resp = self.client.get(url)
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["id"], self.user_a.id)
        self.assertEqual(resp.data["name"], "Anna Annabelle Andersson")
        self.assertEqual(resp.data["email"], "anna@mail.de")
        self.assertEqual(resp.data["address"], "Birkenweg 1, Berlin")
        self.assertEqual(resp.data["role"], "user")
        self.assertIn("updated_at", resp.data)

    def test_get_other_profile_is_allowed(self):
        url = reverse("profile", kwargs={"pk": self.user_b.id})
        resp = self.client.get(url)
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["role"], "store_owner")

    def test_unknown_profile_404(self):
        url = reverse("profile", kwargs={"pk": 999999})
        resp = self.client.get(url)
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_unauthenticated_401(self):
        url = reverse("profile", kwargs={"pk": self.user_a.id})
        resp = APIClient().get(url)
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
