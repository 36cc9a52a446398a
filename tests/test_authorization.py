from datetime import datetime, timezone

import pytest

from eventboard.core.authorization import Action, admin_only, authorize, owner_or_admin
from eventboard.core.exceptions import ForbiddenError
from eventboard.domain.models.event import Event, EventCategory
from eventboard.domain.models.user import Role, User

OWNER = User(id=1, email="owner@example.com", name="Owner")
STRANGER = User(id=2, email="stranger@example.com", name="Stranger")
ADMIN = User(id=3, email="admin@example.com", name="Admin", role=Role.ADMIN)
EVENT = Event(
    id=10,
    title="Match",
    date=datetime(2030, 1, 1, tzinfo=timezone.utc),
    category=EventCategory.SPORT,
    created_by=OWNER.id,
)


def test_admin_only():
    assert admin_only(ADMIN, None, Action.MANAGE).allowed
    decision = admin_only(OWNER, None, Action.MANAGE)
    assert not decision.allowed
    assert "Administrator" in decision.reason


@pytest.mark.parametrize("subject, allowed", [(OWNER, True), (ADMIN, True), (STRANGER, False)])
def test_owner_or_admin(subject, allowed):
    assert owner_or_admin(subject, EVENT, Action.UPDATE).allowed is allowed


def test_denial_reason_names_action_and_resource():
    decision = owner_or_admin(STRANGER, EVENT, Action.DELETE)

    assert decision.reason == "You do not have permission to delete this event."


def test_authorize_raises_forbidden():
    with pytest.raises(ForbiddenError) as exc_info:
        authorize(owner_or_admin, STRANGER, EVENT, Action.UPDATE)

    assert exc_info.value.status_code == 403

    authorize(owner_or_admin, OWNER, EVENT, Action.UPDATE)
