from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient, APITestCase

from profiles.models import Profile
from stores.models import Store

User = get_user_model()


def make_profile(email, role=Profile.Role.USER):
    user = User.objects.create_user(username=email, email=email, password="Pass#1234")
    return Profile.objects.create(user=user, name="Profile Holder Long Name", address="Somewhere 1", role=role)


class ProfileRoleTests(APITestCase):
    def setUp(self):
        self.admin = make_profile("admin@mail.de", Profile.Role.ADMIN)
        self.target = make_profile("shop@mail.de")
        self.store = Store.objects.create(name="Shop", email="SHOP@mail.de", address="Shop Street 1")

        self.client_admin = APIClient()
        self.client_admin.credentials(HTTP_AUTHORIZATION="Token " + Token.objects.create(user=self.admin.user).key)

        self.client_user = APIClient()
        self.client_user.credentials(HTTP_AUTHORIZATION="Token " + Token.objects.create(user=self.target.user).key)

        self.url = reverse("profile-role", kwargs={"pk": self.target.pk})

    def test_admin_promotes_to_store_owner_assigns_matching_store(self):
        resp = self.client_admin.patch(self.url, {"role": "store_owner"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["role"], "store_owner")

        self.store.refresh_from_db()
        self.assertEqual(self.store.owner_id, self.target.pk)

    def test_demotion_releases_stores(self):
        self.client_admin.patch(self.url, {"role": "store_owner"}, format="json")
        resp = self.client_admin.patch(self.url, {"role": "user"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

        self.store.refresh_from_db()
        self.assertIsNone(self.store.owner_id)

    def test_unrelated_store_is_untouched(self):
        other = Store.objects.create(name="Other", email="other@shop.de", address="Elsewhere 2")
        self.client_admin.patch(self.url, {"role": "store_owner"}, format="json")
        other.refresh_from_db()
        self.assertIsNone(other.owner_id)

    def test_invalid_role_400(self):
        resp = self.client_admin.patch(self.url, {"role": "superuser"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("role", resp.data)

    def test_non_admin_forbidden(self):
        resp = self.client_user.patch(self.url, {"role": "admin"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.target.refresh_from_db()
        self.assertEqual(self.target.role, Profile.Role.USER)

    def test_unknown_profile_404(self):
        url = reverse("profile-role", kwargs={"pk": 999999})
        resp = self.client_admin.patch(url, {"role": "user"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_self_edit_keeps_store_with_reassigned_owner(self):
        self.client_admin.patch(self.url, {"role": "store_owner"}, format="json")
        new_owner = make_profile("new-owner@mail.de", Profile.Role.STORE_OWNER)
        store_url = reverse("store-detail", kwargs={"pk": self.store.pk})
        resp = self.client_admin.patch(store_url, {"owner": new_owner.pk}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

        profile_url = reverse("profile", kwargs={"pk": self.target.pk})
        resp = self.client_user.patch(profile_url, {"address": "Moved Street 5"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

        self.store.refresh_from_db()
        self.assertEqual(self.store.owner_id, new_owner.pk)

    def test_setting_same_role_again_does_not_reassign(self):
        self.client_admin.patch(self.url, {"role": "store_owner"}, format="json")
        Store.objects.filter(pk=self.store.pk).update(owner=None)

        resp = self.client_admin.patch(self.url, {"role": "store_owner"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.store.refresh_from_db()
        self.assertIsNone(self.store.owner_id)
