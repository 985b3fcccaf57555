from app.policies.rbac import Viewer, done_by_owner_or_admin
from app.policies.user_policy import UserPolicy
from app.schemas.projects import UserRecord

USER = UserRecord(id=7, attribute_names=("id", "name", "email", "admin", "whitelisted_at"))


def scalars(permitted):
    return [k for k in permitted if isinstance(k, str)]


def test_user_edits_own_record_without_admin_fields():
    permitted = UserPolicy().permitted_attributes(Viewer(id=7), USER)
    assert scalars(permitted) == ["name", "email"]
    assert any(isinstance(k, dict) and "links_attributes" in k for k in permitted)


def test_admin_edits_admin_fields():
    permitted = UserPolicy().permitted_attributes(Viewer(id=1, is_admin=True), USER)
    assert scalars(permitted) == ["name", "email", "admin", "whitelisted_at"]


def test_others_get_nothing():
    assert UserPolicy().permitted_attributes(Viewer(id=8), USER) == []
    assert UserPolicy().permitted_attributes(None, USER) == []


def test_owner_or_admin_gate():
    assert done_by_owner_or_admin(Viewer(id=7), 7) is True
    assert done_by_owner_or_admin(Viewer(id=1, is_admin=True), 7) is True
    assert done_by_owner_or_admin(Viewer(id=8), 7) is False
    assert done_by_owner_or_admin(None, None) is False
