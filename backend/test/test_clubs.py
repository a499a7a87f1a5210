"""
Tests for Clubs, Groups, Membership and Invitations
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from sportnet.models.club import Club, ClubGroup, Invite, JoinClub, JoinGroup
from sportnet.models.notification import Notification, NotificationType
from sportnet.models.user import User


@pytest.fixture
def club(db: Session, coach_user: User) -> Club:
    """Approved club created by coach_user"""
    club = Club(creator_id=coach_user.id, name="Riverside Tennis Club", is_approved=True)
    db.add(club)
    db.commit()
    db.refresh(club)
    return club


@pytest.fixture
def group(db: Session, club: Club, coach_user: User) -> ClubGroup:
    """Approved group owned by coach_user's coach profile"""
    group = ClubGroup(
        owner_id=coach_user.coach_id,
        club_id=club.id,
        club_name=club.name,
        name="Juniors",
        is_approved=True,
    )
    db.add(group)
    db.commit()
    db.refresh(group)
    return group


class TestClubManagement:
    """Test club CRUD"""

    def test_coach_creates_unapproved_club(
        self, client: TestClient, coach_user: User, other_coach_user: User, auth_headers
    ):
        """Test a coach-created club awaits approval"""
        response = client.post(
            "/coach/create-club",
            json={"name": "North Padel", "vision": "Padel for all", "coaches": [str(other_coach_user.id)]},
            headers=auth_headers(coach_user),
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["is_approved"] is False
        assert data["creator_id"] == str(coach_user.id)
        assert [c["id"] for c in data["coaches"]] == [str(other_coach_user.id)]

    def test_admin_created_club_is_approved(self, client: TestClient, admin_user: User, auth_headers):
        """Test clubs created by an admin need no approval"""
        response = client.post("/coach/create-club", json={"name": "City Club"}, headers=auth_headers(admin_user))

        assert response.status_code == 201
        assert response.json()["data"]["is_approved"] is True

    def test_participant_cannot_create_club(self, client: TestClient, participant_user: User, auth_headers):
        """Test club creation requires a coach profile or admin role"""
        response = client.post("/coach/create-club", json={"name": "Mine"}, headers=auth_headers(participant_user))

        assert response.status_code == 403

    def test_unknown_coach(self, client: TestClient, coach_user: User, auth_headers):
        """Test listing an unknown coach"""
        response = client.post(
            "/coach/create-club",
            json={"name": "Ghosts", "coaches": [str(uuid4())]},
            headers=auth_headers(coach_user),
        )

        assert response.status_code == 404

    def test_edit_club(self, client: TestClient, club: Club, coach_user: User, participant_user: User, auth_headers):
        """Test the creator edits name and president"""
        response = client.patch(
            f"/coach/edit-club/{club.id}",
            json={"name": "Riverside TC", "presidentId": str(participant_user.id)},
            headers=auth_headers(coach_user),
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Riverside TC"
        assert data["president_id"] == str(participant_user.id)

    def test_edit_club_not_owner(self, client: TestClient, club: Club, other_coach_user: User, auth_headers):
        """Test another coach cannot edit the club"""
        response = client.patch(
            f"/coach/edit-club/{club.id}", json={"name": "Taken"}, headers=auth_headers(other_coach_user)
        )

        assert response.status_code == 403

    def test_delete_club_as_admin(self, client: TestClient, db: Session, club: Club, admin_user: User, auth_headers):
        """Test an admin deletes any club"""
        club_id = club.id

        response = client.delete(f"/coach/delete-club/{club_id}", headers=auth_headers(admin_user))

        assert response.status_code == 200
        db.expire_all()
        assert db.query(Club).filter(Club.id == club_id).first() is None

    def test_delete_missing_club(self, client: TestClient, coach_user: User, auth_headers):
        """Test deleting an unknown club"""
        response = client.delete(f"/coach/delete-club/{uuid4()}", headers=auth_headers(coach_user))

        assert response.status_code == 404

    def test_admin_approves_club(self, client: TestClient, db: Session, coach_user: User, admin_user: User, auth_headers):
        """Test the admin approval endpoint"""
        pending = Club(creator_id=coach_user.id, name="Pending Club")
        db.add(pending)
        db.commit()

        response = client.put(f"/admin/clubs/{pending.id}/approve", headers=auth_headers(admin_user))

        assert response.status_code == 200
        assert response.json()["data"]["is_approved"] is True


class TestGroupManagement:
    """Test group CRUD"""

    def test_create_group(self, client: TestClient, club: Club, coach_user: User, auth_headers):
        """Test a coach creates a group in a club"""
        response = client.post(
            f"/coach/create-group/{club.id}",
            json={"name": "Seniors", "description": "Over 50"},
            headers=auth_headers(coach_user),
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["club_name"] == club.name
        assert data["owner_id"] == str(coach_user.coach_id)
        assert data["is_approved"] is False

    def test_create_group_missing_club(self, client: TestClient, coach_user: User, auth_headers):
        """Test a group needs an existing club"""
        response = client.post(f"/coach/create-group/{uuid4()}", json={"name": "X"}, headers=auth_headers(coach_user))

        assert response.status_code == 404

    def test_edit_group(self, client: TestClient, group: ClubGroup, coach_user: User, auth_headers):
        """Test the owner edits a group"""
        response = client.post(
            f"/coach/edit-group/{group.id}", json={"name": "Juniors A"}, headers=auth_headers(coach_user)
        )

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Juniors A"

    def test_edit_group_not_owner(self, client: TestClient, group: ClubGroup, other_coach_user: User, auth_headers):
        """Test another coach cannot edit the group"""
        response = client.post(
            f"/coach/edit-group/{group.id}", json={"name": "Mine"}, headers=auth_headers(other_coach_user)
        )

        assert response.status_code == 403

    def test_delete_group(self, client: TestClient, db: Session, group: ClubGroup, coach_user: User, auth_headers):
        """Test the owner deletes a group"""
        group_id = group.id

        response = client.delete(f"/coach/delete-group/{group_id}", headers=auth_headers(coach_user))

        assert response.status_code == 200
        db.expire_all()
        assert db.query(ClubGroup).filter(ClubGroup.id == group_id).first() is None


class TestMembership:
    """Test join and leave"""

    def test_join_creates_pending_request(
        self, client: TestClient, club: Club, participant_user: User, auth_headers
    ):
        """Test joining a club without an invite"""
        response = client.post(f"/participant/join-to-club/{club.id}", headers=auth_headers(participant_user))

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Join request sent"
        assert body["data"]["is_approved"] is False

    def test_join_twice_conflicts(self, client: TestClient, club: Club, participant_user: User, auth_headers):
        """Test a second join request"""
        headers = auth_headers(participant_user)
        client.post(f"/participant/join-to-club/{club.id}", headers=headers)

        response = client.post(f"/participant/join-to-club/{club.id}", headers=headers)

        assert response.status_code == 409

    def test_join_unapproved_club_forbidden(
        self, client: TestClient, db: Session, coach_user: User, participant_user: User, auth_headers
    ):
        """Test clubs must be approved before accepting members"""
        pending = Club(creator_id=coach_user.id, name="Not Yet")
        db.add(pending)
        db.commit()

        response = client.post(f"/participant/join-to-club/{pending.id}", headers=auth_headers(participant_user))

        assert response.status_code == 403

    def test_leave_club(self, client: TestClient, db: Session, club: Club, participant_user: User, auth_headers):
        """Test leaving removes the request"""
        headers = auth_headers(participant_user)
        client.post(f"/participant/join-to-club/{club.id}", headers=headers)

        response = client.post(f"/participant/leave-club/{club.id}", headers=headers)

        assert response.status_code == 200
        assert db.query(JoinClub).count() == 0

    def test_leave_club_not_member(self, client: TestClient, club: Club, participant_user: User, auth_headers):
        """Test leaving a club never joined"""
        response = client.post(f"/participant/leave-club/{club.id}", headers=auth_headers(participant_user))

        assert response.status_code == 404

    def test_join_and_leave_group(
        self, client: TestClient, db: Session, group: ClubGroup, participant_user: User, auth_headers
    ):
        """Test group membership round trip"""
        headers = auth_headers(participant_user)

        joined = client.post(f"/participant/join-to-group/{group.id}", headers=headers)
        left = client.post(f"/participant/leave-group/{group.id}", headers=headers)

        assert joined.status_code == 201
        assert left.status_code == 200
        assert db.query(JoinGroup).count() == 0


class TestJoinApproval:
    """Test approval of join requests"""

    def test_creator_approves_club_request(
        self, client: TestClient, db: Session, club: Club, coach_user: User, participant_user: User, auth_headers
    ):
        """Test approval marks the request and notifies the member"""
        client.post(f"/participant/join-to-club/{club.id}", headers=auth_headers(participant_user))

        response = client.post(
            "/coach/approve-join-club",
            json={"userId": str(participant_user.id), "clubId": str(club.id)},
            headers=auth_headers(coach_user),
        )

        assert response.status_code == 200
        assert response.json()["data"]["is_approved"] is True
        notification = db.query(Notification).filter(Notification.user_id == participant_user.id).one()
        assert notification.notification_type == NotificationType.JOIN_REQUEST_APPROVED
        assert club.name in notification.message

    def test_other_coach_cannot_approve(
        self, client: TestClient, club: Club, other_coach_user: User, participant_user: User, auth_headers
    ):
        """Test only the creator or an admin approves"""
        client.post(f"/participant/join-to-club/{club.id}", headers=auth_headers(participant_user))

        response = client.post(
            "/coach/approve-join-club",
            json={"userId": str(participant_user.id), "clubId": str(club.id)},
            headers=auth_headers(other_coach_user),
        )

        assert response.status_code == 403

    def test_missing_request(self, client: TestClient, club: Club, coach_user: User, participant_user: User, auth_headers):
        """Test approving a request that does not exist"""
        response = client.post(
            "/coach/approve-join-club",
            json={"userId": str(participant_user.id), "clubId": str(club.id)},
            headers=auth_headers(coach_user),
        )

        assert response.status_code == 404

    def test_owner_approves_group_request(
        self, client: TestClient, group: ClubGroup, coach_user: User, participant_user: User, auth_headers
    ):
        """Test the group owner approves a join request"""
        client.post(f"/participant/join-to-group/{group.id}", headers=auth_headers(participant_user))

        response = client.post(
            "/coach/approve-join-group",
            json={"userId": str(participant_user.id), "groupId": str(group.id)},
            headers=auth_headers(coach_user),
        )

        assert response.status_code == 200
        assert response.json()["data"]["is_approved"] is True


class TestInvitations:
    """Test invites and invite-based auto approval"""

    def test_invite_to_club_notifies(
        self, client: TestClient, db: Session, club: Club, coach_user: User, participant_user: User, auth_headers
    ):
        """Test the invitee receives a notification"""
        response = client.post(
            "/coach/invite-club",
            json={"userId": str(participant_user.id), "clubId": str(club.id)},
            headers=auth_headers(coach_user),
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["club_id"] == str(club.id)
        assert data["group_id"] is None
        assert data["event_id"] is None
        notification = db.query(Notification).filter(Notification.user_id == participant_user.id).one()
        assert notification.notification_type == NotificationType.INVITE_RECEIVED

    def test_invited_user_joins_approved(
        self, client: TestClient, club: Club, coach_user: User, participant_user: User, auth_headers
    ):
        """Test an invited user's join request is approved at once"""
        client.post(
            "/coach/invite-club",
            json={"userId": str(participant_user.id), "clubId": str(club.id)},
            headers=auth_headers(coach_user),
        )

        response = client.post(f"/participant/join-to-club/{club.id}", headers=auth_headers(participant_user))

        assert response.status_code == 201
        assert response.json()["message"] == "Joined club"
        assert response.json()["data"]["is_approved"] is True

    def test_duplicate_invite_conflicts(
        self, client: TestClient, db: Session, club: Club, coach_user: User, participant_user: User, auth_headers
    ):
        """Test inviting the same user twice"""
        body = {"userId": str(participant_user.id), "clubId": str(club.id)}
        headers = auth_headers(coach_user)
        client.post("/coach/invite-club", json=body, headers=headers)

        response = client.post("/coach/invite-club", json=body, headers=headers)

        assert response.status_code == 409
        assert db.query(Invite).count() == 1

    def test_invite_by_non_creator_forbidden(
        self, client: TestClient, club: Club, other_coach_user: User, participant_user: User, auth_headers
    ):
        """Test only the club creator invites"""
        response = client.post(
            "/coach/invite-club",
            json={"userId": str(participant_user.id), "clubId": str(club.id)},
            headers=auth_headers(other_coach_user),
        )

        assert response.status_code == 403

    def test_invite_unknown_user(self, client: TestClient, club: Club, coach_user: User, auth_headers):
        """Test inviting a user that does not exist"""
        response = client.post(
            "/coach/invite-club",
            json={"userId": str(uuid4()), "clubId": str(club.id)},
            headers=auth_headers(coach_user),
        )

        assert response.status_code == 404

    def test_invite_to_group(
        self, client: TestClient, group: ClubGroup, coach_user: User, participant_user: User, auth_headers
    ):
        """Test a group invite followed by an auto-approved join"""
        client.post(
            "/coach/invite-group",
            json={"userId": str(participant_user.id), "groupId": str(group.id)},
            headers=auth_headers(coach_user),
        )

        response = client.post(f"/participant/join-to-group/{group.id}", headers=auth_headers(participant_user))

        assert response.json()["data"]["is_approved"] is True

    def test_invite_to_event(
        self, client: TestClient, make_event, coach_user: User, participant_user: User, auth_headers
    ):
        """Test the event owner invites a participant"""
        event = make_event()

        response = client.post(
            "/coach/invite-event",
            json={"userId": str(participant_user.id), "eventId": str(event.id)},
            headers=auth_headers(coach_user),
        )

        assert response.status_code == 201
        assert response.json()["data"]["event_id"] == str(event.id)

    def test_invite_to_event_not_managed(
        self, client: TestClient, make_event, other_coach_user: User, participant_user: User, auth_headers
    ):
        """Test a coach unrelated to the event cannot invite"""
        event = make_event()

        response = client.post(
            "/coach/invite-event",
            json={"userId": str(participant_user.id), "eventId": str(event.id)},
            headers=auth_headers(other_coach_user),
        )

        assert response.status_code == 403
