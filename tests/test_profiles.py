"""Profile policies: visibility, self-service limits, admin updates, and account lockout."""

import unittest
import uuid

from tests.support import ApiTestCase, bearer


class TestProfileVisibility(ApiTestCase):
    def test_user_lists_only_self(self) -> None:
        user_id = self.signup("u@example.com")
        self.signup("other@example.com")
        response = self.client.get(self.url("/profiles"), headers=bearer(user_id))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([p["id"] for p in response.json()["profiles"]], [str(user_id)])

    def test_admin_lists_everyone(self) -> None:
        admin_id = self.make_admin()
        self.signup("u@example.com")
        self.signup("other@example.com")
        response = self.client.get(self.url("/profiles"), headers=bearer(admin_id))
        self.assertEqual(len(response.json()["profiles"]), 3)

    def test_other_profile_reads_as_not_found(self) -> None:
        user_id = self.signup("u@example.com")
        other_id = self.signup("other@example.com")
        hidden = self.client.get(self.url(f"/profiles/{other_id}"), headers=bearer(user_id))
        missing = self.client.get(self.url(f"/profiles/{uuid.uuid4()}"), headers=bearer(user_id))
        self.assertEqual(hidden.status_code, 404)
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(hidden.json(), missing.json())


class TestSelfUpdate(ApiTestCase):
    """Callers may edit their own contact details but never their role or active flag."""

    def test_self_update_of_name_and_email(self) -> None:
        user_id = self.signup("u@example.com")
        response = self.client.patch(
            self.url(f"/profiles/{user_id}"),
            json={"full_name": "Una User", "email": "una@example.com"},
            headers=bearer(user_id),
        )
        self.assertEqual(response.status_code, 200, response.text)
        stored = self.load_profile(user_id)
        self.assertEqual(stored.full_name, "Una User")
        self.assertEqual(stored.email, "una@example.com")

    def test_self_promotion_leaves_role_unchanged(self) -> None:
        user_id = self.signup("u@example.com")
        response = self.client.patch(
            self.url(f"/profiles/{user_id}"),
            json={"role": "admin", "full_name": "Sneaky"},
            headers=bearer(user_id),
        )
        self.assertEqual(response.status_code, 403)
        stored = self.load_profile(user_id)
        self.assertEqual(stored.role, "user")
        self.assertTrue(stored.is_active)
        self.assertEqual(stored.full_name, "User")

    def test_self_deactivation_is_rejected(self) -> None:
        user_id = self.signup("u@example.com")
        response = self.client.patch(
            self.url(f"/profiles/{user_id}"),
            json={"is_active": False},
            headers=bearer(user_id),
        )
        self.assertEqual(response.status_code, 403)
        self.assertTrue(self.load_profile(user_id).is_active)

    def test_resending_current_role_is_allowed(self) -> None:
        user_id = self.signup("u@example.com", role="employee")
        response = self.client.patch(
            self.url(f"/profiles/{user_id}"),
            json={"role": "employee", "is_active": True, "avatar_url": "https://cdn.example.com/a.png"},
            headers=bearer(user_id),
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["avatar_url"], "https://cdn.example.com/a.png")

    def test_updating_someone_else_is_not_found(self) -> None:
        user_id = self.signup("u@example.com")
        other_id = self.signup("other@example.com")
        response = self.client.patch(
            self.url(f"/profiles/{other_id}"),
            json={"full_name": "Hijacked"},
            headers=bearer(user_id),
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(self.load_profile(other_id).full_name, "User")

    def test_unknown_fields_are_rejected(self) -> None:
        user_id = self.signup("u@example.com")
        response = self.client.patch(
            self.url(f"/profiles/{user_id}"),
            json={"id": str(uuid.uuid4())},
            headers=bearer(user_id),
        )
        self.assertEqual(response.status_code, 422)


class TestAdminProfileManagement(ApiTestCase):
    def test_admin_changes_role_and_status(self) -> None:
        admin_id = self.make_admin()
        user_id = self.signup("u@example.com")
        response = self.client.patch(
            self.url(f"/profiles/{user_id}"),
            json={"role": "employee", "full_name": "Emp Loyee"},
            headers=bearer(admin_id),
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["role"], "employee")

    def test_invalid_role_is_rejected(self) -> None:
        admin_id = self.make_admin()
        user_id = self.signup("u@example.com")
        response = self.client.patch(
            self.url(f"/profiles/{user_id}"),
            json={"role": "superuser"},
            headers=bearer(admin_id),
        )
        self.assertEqual(response.status_code, 422)

    def test_reactivation_restores_access(self) -> None:
        admin_id = self.make_admin()
        user_id = self.signup("u@example.com")
        self.set_profile(user_id, is_active=False)
        self.assertEqual(self.client.get(self.url("/profiles"), headers=bearer(user_id)).status_code, 403)
        response = self.client.patch(
            self.url(f"/profiles/{user_id}"),
            json={"is_active": True},
            headers=bearer(admin_id),
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get(self.url("/profiles"), headers=bearer(user_id)).status_code, 200)

    def test_admin_provisions_profile_for_existing_identity(self) -> None:
        admin_id = self.make_admin()
        user_id = self.signup("u@example.com")
        duplicate = self.client.post(
            self.url("/profiles"),
            json={"id": str(user_id), "email": "u@example.com", "full_name": "Dup"},
            headers=bearer(admin_id),
        )
        self.assertEqual(duplicate.status_code, 409)

        orphan = self.client.post(
            self.url("/profiles"),
            json={"id": str(uuid.uuid4()), "email": "nobody@example.com", "full_name": "Nobody"},
            headers=bearer(admin_id),
        )
        self.assertEqual(orphan.status_code, 422)

    def test_non_admin_cannot_provision(self) -> None:
        user_id = self.signup("u@example.com")
        response = self.client.post(
            self.url("/profiles"),
            json={"id": str(uuid.uuid4()), "email": "x@example.com", "full_name": "X"},
            headers=bearer(user_id),
        )
        self.assertEqual(response.status_code, 403)


class TestAuthentication(ApiTestCase):
    def test_missing_token(self) -> None:
        response = self.client.get(self.url("/me"))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers.get("www-authenticate"), "Bearer")

    def test_garbage_token(self) -> None:
        response = self.client.get(self.url("/me"), headers={"Authorization": "Bearer not-a-jwt"})
        self.assertEqual(response.status_code, 401)

    def test_token_for_identity_without_profile(self) -> None:
        response = self.client.get(self.url("/profiles"), headers=bearer(uuid.uuid4()))
        self.assertEqual(response.status_code, 401)

    def test_stats_require_admin(self) -> None:
        admin_id = self.make_admin()
        user_id = self.signup("u@example.com")
        self.set_profile(user_id, is_active=False)
        self.assertEqual(self.client.get(self.url("/admin/stats"), headers=bearer(admin_id)).status_code, 200)
        stats = self.client.get(self.url("/admin/stats"), headers=bearer(admin_id)).json()
        self.assertEqual(stats["total_users"], 2)
        self.assertEqual(stats["active_users"], 1)
        self.assertEqual(stats["admin_users"], 1)
        self.assertEqual(stats["total_menus"], 0)
        self.set_profile(user_id, is_active=True)
        self.assertEqual(self.client.get(self.url("/admin/stats"), headers=bearer(user_id)).status_code, 403)


if __name__ == "__main__":
    unittest.main()
