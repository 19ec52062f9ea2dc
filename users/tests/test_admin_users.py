# users/tests/test_admin_users.py

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status

from backend.testing import auth_client, make_admin, make_user
from permissions.roles import ROLE_ADMIN, ROLE_USER

User = get_user_model()


class AdminUserTests(TestCase):
    def setUp(self):
        self.admin = make_admin("boss@example.com", name="Boss")
        self.client = auth_client(self.admin)
        self.list_url = reverse("users-admin:admin-users-list")

    def _url(self, name, user):
        return reverse(f"users-admin:admin-users-{name}", args=[user.pk])

    def test_customers_are_forbidden(self):
        res = auth_client(make_user()).get(self.list_url)
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_and_search(self):
        make_user("alice@example.com", name="Alice")
        make_user("bob@example.com", name="Bob")

        res = self.client.get(self.list_url, {"search": "ali"})

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([u["email"] for u in res.data["results"]], ["alice@example.com"])
        self.assertEqual(res.data["pagination"]["total"], 1)

    def test_create(self):
        res = self.client.post(
            self.list_url,
            {"name": "Staff", "email": "staff@example.com", "password": "longenough1", "role": ROLE_ADMIN},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        created = User.objects.get(email="staff@example.com")
        self.assertEqual(created.role, ROLE_ADMIN)
        self.assertTrue(created.is_staff)

    def test_set_role(self):
        target = make_user()

        res = self.client.post(self._url("role", target), {"role": ROLE_ADMIN}, format="json")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        target.refresh_from_db()
        self.assertEqual(target.role, ROLE_ADMIN)

    def test_ban_and_unban(self):
        target = make_user()

        res = self.client.post(self._url("ban", target), {"reason": "Abusive reviews"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(res.data["banned"])

        res = self.client.post(self._url("unban", target))
        self.assertFalse(res.data["banned"])
        self.assertEqual(res.data["ban_reason"], "")

    def test_ban_validation(self):
        target = make_user()

        res = self.client.post(
            self._url("ban", target),
            {"reason": "no", "expires_at": "2000-01-01T00:00:00Z"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("reason", res.data["field_errors"])
        self.assertIn("expires_at", res.data["field_errors"])

    def test_self_guards(self):
        res = self.client.post(self._url("ban", self.admin), {"reason": "Testing self"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

        res = self.client.post(self._url("role", self.admin), {"role": ROLE_USER}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

        res = self.client.delete(self._url("detail", self.admin))
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

        self.admin.refresh_from_db()
        self.assertEqual(self.admin.role, ROLE_ADMIN)
        self.assertFalse(self.admin.banned)

    def test_delete(self):
        target = make_user()

        res = self.client.delete(self._url("detail", target))

        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(User.objects.filter(pk=target.pk).exists())
