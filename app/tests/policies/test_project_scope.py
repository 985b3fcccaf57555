import pytest
from sqlalchemy import select

from app.models.enums import ProjectState
from app.models.project import Project
from app.policies.project_scope import ProjectScope
from app.policies.rbac import Viewer

from conftest import OWNER_ID, make_project


ALL_STATES = list(ProjectState)


def candidates():
    return [make_project(state, id=i) for i, state in enumerate(ALL_STATES, start=1)]


def visible_states(scope):
    return {p.state for p in scope.resolve(candidates())}


def test_admin_sees_everything_but_deleted(admin):
    assert visible_states(ProjectScope(admin, OWNER_ID)) == set(ALL_STATES) - {ProjectState.deleted}


def test_owner_sees_everything_but_deleted(owner):
    assert visible_states(ProjectScope(owner, OWNER_ID)) == set(ALL_STATES) - {ProjectState.deleted}


@pytest.mark.parametrize("viewer", [None, Viewer(id=20)])
def test_others_do_not_see_unpublished_projects(viewer):
    assert visible_states(ProjectScope(viewer, OWNER_ID)) == set(ALL_STATES) - {
        ProjectState.deleted,
        ProjectState.draft,
        ProjectState.rejected,
    }


def test_anonymous_viewer_is_not_owner_of_ownerless_scope():
    assert ProjectState.draft in ProjectScope(None, None).excluded_states


def test_resolve_accepts_plain_state_strings(owner):
    rows = [Project(id=1, user_id=OWNER_ID, name="a", state="deleted"),
            Project(id=2, user_id=OWNER_ID, name="b", state="draft")]
    assert [p.id for p in ProjectScope(owner, OWNER_ID).resolve(rows)] == [2]


def test_apply_filters_query(db, stranger, owner):
    for i, state in enumerate(ALL_STATES, start=1):
        db.add(Project(id=i, user_id=OWNER_ID, name=f"p{i}", state=state.value))
    db.commit()

    stmt = select(Project).where(Project.user_id == OWNER_ID)

    public = db.scalars(ProjectScope(stranger, OWNER_ID).apply(stmt)).all()
    assert {p.state for p in public} == {
        s.value for s in ALL_STATES
    } - {"deleted", "draft", "rejected"}

    own = db.scalars(ProjectScope(owner, OWNER_ID).apply(stmt)).all()
    assert len(own) == len(ALL_STATES) - 1
