"""Tests for Group, membership and venue endpoints."""
from socialeyes.models.group import Membership, MembershipStatus
from tests.conftest import as_user, add_member, create_test_user, create_test_group


class TestGroupCRUD:
    """Group create / get / list."""

    def test_create_group(self, client, db):
        organizer = create_test_user(client, name="Organizer")
        group = create_test_group(client, organizer, name="Hiking Crew")
        assert group["name"] == "Hiking Crew"
        assert group["organizerId"] == organizer["id"]
        assert group["private"] is False

        # Organizer is auto-added as co-host
        membership = db.query(Membership).filter(Membership.group_id == group["id"]).one()
        assert membership.user_id == organizer["id"]
        assert membership.status == MembershipStatus.co_host

    def test_create_group_requires_identity(self, client):
        resp = client.post("/api/groups/", json={"name": "Anon", "city": "X", "state": "Y"})
        assert resp.status_code == 401
        assert resp.json()["detail"]["message"] == "Authentication required"

    def test_create_group_unknown_requester(self, client):
        resp = client.post("/api/groups/", headers={"X-User-Id": "999"},
                           json={"name": "Ghost", "city": "X", "state": "Y"})
        assert resp.status_code == 401

    def test_create_group_unknown_timezone(self, client):
        organizer = create_test_user(client, name="Organizer")
        resp = client.post("/api/groups/", headers=as_user(organizer), json={
            "name": "Lost", "city": "X", "state": "Y", "timezone": "Mars/Olympus",
        })
        assert resp.status_code == 422

    def test_get_group(self, client):
        organizer = create_test_user(client)
        group = create_test_group(client, organizer)
        resp = client.get(f"/api/groups/{group['id']}")
        assert resp.status_code == 200
        assert resp.json()["name"] == "Test Group"

    def test_get_group_not_found(self, client):
        resp = client.get("/api/groups/9999")
        assert resp.status_code == 404
        assert resp.json()["detail"]["message"] == "Group couldn't be found"

    def test_list_groups(self, client):
        organizer = create_test_user(client)
        create_test_group(client, organizer, name="Group A")
        create_test_group(client, organizer, name="Group B")
        resp = client.get("/api/groups/")
        assert resp.status_code == 200
        assert [g["name"] for g in resp.json()] == ["Group A", "Group B"]


class TestMemberships:
    """Organizer-managed memberships."""

    def test_add_member(self, client):
        organizer = create_test_user(client, name="Organizer")
        member = create_test_user(client, name="Member")
        group = create_test_group(client, organizer)

        data = add_member(client, group, organizer, member, status="co-host")
        assert data["userId"] == member["id"]
        assert data["status"] == "co-host"

    def test_add_member_defaults_to_member(self, client):
        organizer = create_test_user(client, name="Organizer")
        member = create_test_user(client, name="Member")
        group = create_test_group(client, organizer)

        resp = client.post(f"/api/groups/{group['id']}/members", headers=as_user(organizer),
                           json={"userId": member["id"]})
        assert resp.status_code == 201
        assert resp.json()["status"] == "member"

    def test_add_duplicate_member(self, client):
        organizer = create_test_user(client, name="Organizer")
        group = create_test_group(client, organizer)

        # Organizer already holds a co-host membership
        resp = client.post(f"/api/groups/{group['id']}/members", headers=as_user(organizer),
                           json={"userId": organizer["id"], "status": "member"})
        assert resp.status_code == 400
        assert resp.json()["detail"]["message"] == "User is already a member of the group"

    def test_co_host_cannot_add_members(self, client):
        organizer = create_test_user(client, name="Organizer")
        cohost = create_test_user(client, name="Cohost")
        newcomer = create_test_user(client, name="Newcomer")
        group = create_test_group(client, organizer)
        add_member(client, group, organizer, cohost, status="co-host")

        resp = client.post(f"/api/groups/{group['id']}/members", headers=as_user(cohost),
                           json={"userId": newcomer["id"]})
        assert resp.status_code == 403

    def test_add_unknown_user(self, client):
        organizer = create_test_user(client, name="Organizer")
        group = create_test_group(client, organizer)
        resp = client.post(f"/api/groups/{group['id']}/members", headers=as_user(organizer),
                           json={"userId": 9999})
        assert resp.status_code == 404

    def test_invalid_membership_status(self, client):
        organizer = create_test_user(client, name="Organizer")
        member = create_test_user(client, name="Member")
        group = create_test_group(client, organizer)
        resp = client.post(f"/api/groups/{group['id']}/members", headers=as_user(organizer),
                           json={"userId": member["id"], "status": "admin"})
        assert resp.status_code == 422


class TestVenues:
    """Venue creation is limited to organizer and co-hosts."""

    VENUE = {"address": "123 Main St", "city": "Portland", "state": "OR", "lat": 45.5, "lng": -122.6}

    def test_organizer_creates_venue(self, client):
        organizer = create_test_user(client, name="Organizer")
        group = create_test_group(client, organizer)
        resp = client.post(f"/api/groups/{group['id']}/venues", headers=as_user(organizer), json=self.VENUE)
        assert resp.status_code == 201
        data = resp.json()
        assert data["groupId"] == group["id"]
        assert data["lat"] == 45.5

    def test_co_host_creates_venue(self, client):
        organizer = create_test_user(client, name="Organizer")
        cohost = create_test_user(client, name="Cohost")
        group = create_test_group(client, organizer)
        add_member(client, group, organizer, cohost, status="co-host")
        resp = client.post(f"/api/groups/{group['id']}/venues", headers=as_user(cohost), json=self.VENUE)
        assert resp.status_code == 201

    def test_member_cannot_create_venue(self, client):
        organizer = create_test_user(client, name="Organizer")
        member = create_test_user(client, name="Member")
        group = create_test_group(client, organizer)
        add_member(client, group, organizer, member)
        resp = client.post(f"/api/groups/{group['id']}/venues", headers=as_user(member), json=self.VENUE)
        assert resp.status_code == 403
        assert resp.json()["detail"] == {"message": "Forbidden", "statusCode": 403}
