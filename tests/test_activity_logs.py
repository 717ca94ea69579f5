"""Audit trail: callers append only as themselves, read their own, admins read all."""

import unittest
import uuid

from tests.support import ApiTestCase, bearer


class TestActivityLogInsert(ApiTestCase):
    def test_append_as_self_records_source_address(self) -> None:
        user_id = self.signup("u@example.com")
        response = self.client.post(
            self.url("/activity-logs"),
            json={"action": "menu_opened", "entity_type": "menu", "details": {"route": "/reports"}},
            headers=bearer(user_id),
        )
        self.assertEqual(response.status_code, 201, response.text)
        body = response.json()
        self.assertEqual(body["user_id"], str(user_id))
        self.assertEqual(body["details"], {"route": "/reports"})
        self.assertEqual(body["ip_address"], "testclient")

    def test_explicit_own_actor_is_accepted(self) -> None:
        user_id = self.signup("u@example.com")
        response = self.client.post(
            self.url("/activity-logs"),
            json={"user_id": str(user_id), "action": "login", "entity_type": "user"},
            headers=bearer(user_id),
        )
        self.assertEqual(response.status_code, 201)

    def test_logging_as_someone_else_is_rejected(self) -> None:
        admin_id = self.make_admin()
        user_id = self.signup("u@example.com")
        for caller in (user_id, admin_id):
            response = self.client.post(
                self.url("/activity-logs"),
                json={"user_id": str(uuid.uuid4()), "action": "forged", "entity_type": "user"},
                headers=bearer(caller),
            )
            self.assertEqual(response.status_code, 403)
        listing = self.client.get(
            self.url("/activity-logs"), params={"action": "forged"}, headers=bearer(admin_id)
        )
        self.assertEqual(listing.json()["total"], 0)


class TestActivityLogVisibility(ApiTestCase):
    def test_users_see_own_entries_admin_sees_all(self) -> None:
        admin_id = self.make_admin()
        alice = self.signup("alice@example.com")
        bob = self.signup("bob@example.com")
        for caller in (alice, alice, bob):
            self.client.post(
                self.url("/activity-logs"),
                json={"action": "viewed", "entity_type": "menu"},
                headers=bearer(caller),
            )

        alice_view = self.client.get(self.url("/activity-logs"), headers=bearer(alice)).json()
        self.assertEqual(alice_view["total"], 2)
        self.assertTrue(all(i["user_id"] == str(alice) for i in alice_view["items"]))

        admin_view = self.client.get(
            self.url("/activity-logs"), params={"action": "viewed"}, headers=bearer(admin_id)
        ).json()
        self.assertEqual(admin_view["total"], 3)

    def test_pagination_and_limit_bound(self) -> None:
        user_id = self.signup("u@example.com")
        for n in range(3):
            self.client.post(
                self.url("/activity-logs"),
                json={"action": f"step_{n}", "entity_type": "wizard"},
                headers=bearer(user_id),
            )
        page = self.client.get(
            self.url("/activity-logs"), params={"limit": 2, "offset": 2}, headers=bearer(user_id)
        ).json()
        self.assertEqual(page["total"], 3)
        self.assertEqual(len(page["items"]), 1)
        too_big = self.client.get(
            self.url("/activity-logs"), params={"limit": 100000}, headers=bearer(user_id)
        )
        self.assertEqual(too_big.status_code, 422)


class TestAdminActionsAreAudited(ApiTestCase):
    def test_menu_and_grant_changes_leave_entries(self) -> None:
        admin_id = self.make_admin()
        user_id = self.signup("u@example.com")
        menu = self.client.post(
            self.url("/menus"),
            json={"name": "Reports", "route": "/reports"},
            headers=bearer(admin_id),
        ).json()
        self.client.put(
            self.url(f"/menus/{menu['id']}/grants"),
            json={"user_ids": [str(user_id)]},
            headers=bearer(admin_id),
        )
        self.client.patch(
            self.url(f"/profiles/{user_id}"),
            json={"is_active": False},
            headers=bearer(admin_id),
        )
        self.client.delete(self.url(f"/menus/{menu['id']}"), headers=bearer(admin_id))

        items = self.client.get(self.url("/activity-logs"), headers=bearer(admin_id)).json()["items"]
        actions = {i["action"] for i in items}
        self.assertTrue(
            {"menu_created", "menu_access_updated", "user_status_changed", "menu_deleted"} <= actions
        )
        self.assertTrue(all(i["user_id"] == str(admin_id) for i in items))
        access = next(i for i in items if i["action"] == "menu_access_updated")
        self.assertEqual(access["details"]["granted"], [str(user_id)])
        self.assertEqual(access["entity_id"], menu["id"])

    def test_rejected_write_leaves_no_entry(self) -> None:
        user_id = self.signup("u@example.com")
        self.client.post(
            self.url("/menus"),
            json={"name": "Nope", "route": "/nope"},
            headers=bearer(user_id),
        )
        listing = self.client.get(self.url("/activity-logs"), headers=bearer(user_id)).json()
        self.assertEqual(listing["total"], 0)

    def test_empty_profile_patch_leaves_no_entry(self) -> None:
        user_id = self.signup("u@example.com")
        response = self.client.patch(
            self.url(f"/profiles/{user_id}"), json={}, headers=bearer(user_id)
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["id"], str(user_id))
        listing = self.client.get(self.url("/activity-logs"), headers=bearer(user_id)).json()
        self.assertEqual(listing["total"], 0)

    def test_empty_menu_patch_leaves_no_entry(self) -> None:
        admin_id = self.make_admin()
        menu = self.client.post(
            self.url("/menus"),
            json={"name": "Reports", "route": "/reports"},
            headers=bearer(admin_id),
        ).json()
        before = self.client.get(self.url("/activity-logs"), headers=bearer(admin_id)).json()["total"]
        response = self.client.patch(
            self.url(f"/menus/{menu['id']}"), json={}, headers=bearer(admin_id)
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["name"], "Reports")
        after = self.client.get(self.url("/activity-logs"), headers=bearer(admin_id)).json()["total"]
        self.assertEqual(after, before)


if __name__ == "__main__":
    unittest.main()
