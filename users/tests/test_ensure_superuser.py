# users/tests/test_ensure_superuser.py

import os
from io import StringIO
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase

from backend.testing import make_user
from permissions.roles import ROLE_ADMIN

User = get_user_model()

ENV = {"AUTO_ADMIN_EMAIL": "owner@unikcandle.com", "AUTO_ADMIN_PASSWORD": "Sup3rSecret!"}


class EnsureSuperuserTests(TestCase):
    def _run(self):
        out = StringIO()
        call_command("ensure_superuser", stdout=out)
        return out.getvalue()

    @mock.patch.dict(os.environ, {"AUTO_ADMIN_EMAIL": "", "AUTO_ADMIN_PASSWORD": ""})
    def test_skips_without_env(self):
        self.assertIn("Skipping", self._run())
        self.assertFalse(User.objects.exists())

    @mock.patch.dict(os.environ, ENV)
    def test_creates_admin(self):
        out = self._run()

        user = User.objects.get(email="owner@unikcandle.com")
        self.assertEqual(user.role, ROLE_ADMIN)
        self.assertTrue(user.is_superuser)
        self.assertNotIn("Sup3rSecret!", out)

    @mock.patch.dict(os.environ, ENV)
    def test_promotes_existing_account(self):
        user = make_user("owner@unikcandle.com")
        user.ban(reason="Old ban")

        self._run()

        user.refresh_from_db()
        self.assertEqual(user.role, ROLE_ADMIN)
        self.assertFalse(user.banned)
        self.assertTrue(user.check_password("Sup3rSecret!"))
        self.assertEqual(User.objects.count(), 1)
