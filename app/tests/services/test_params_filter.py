from app.models.enums import ProjectState
from app.policies.projects_policy import ProjectPolicy
from app.services.params_filter import permit_params

from conftest import make_project, solidarity


def test_unlisted_keys_are_dropped():
    assert permit_params({"headline": "hi", "state": "online"}, ["headline"]) == {"headline": "hi"}


def test_nested_lists_are_filtered_recursively():
    permitted = [{"rewards_attributes": ["id", "title", {"shipping_fees_attributes": ["value"]}]}]
    params = {
        "rewards_attributes": [
            {"id": 1, "title": "T", "deliver_at": "2030-01-01",
             "shipping_fees_attributes": [{"value": 5, "destination": "x"}]},
        ]
    }
    assert permit_params(params, permitted) == {
        "rewards_attributes": [{"id": 1, "title": "T", "shipping_fees_attributes": [{"value": 5}]}]
    }


def test_index_keyed_nested_params():
    permitted = [{"integrations_attributes": ["name", {"data": ["name"]}]}]
    params = {"integrations_attributes": {"0": {"name": "GA", "data": {"name": "x", "secret": "y"}}}}
    assert permit_params(params, permitted) == {
        "integrations_attributes": {"0": {"name": "GA", "data": {"name": "x"}}}
    }


def test_scalar_key_does_not_accept_a_mapping():
    assert permit_params({"headline": {"x": 1}}, ["headline"]) == {}
    assert permit_params({"headline": [{"state": "online"}]}, ["headline"]) == {}
    assert permit_params({"headline": ["a", {"b": 1}]}, ["headline"]) == {}


def test_scalar_key_accepts_scalars_and_scalar_lists():
    params = {"headline": "hi", "online_days": 30, "city": None, "tags": ["1", "2"]}
    assert permit_params(params, ["headline", "online_days", "city", "tags"]) == params


def test_single_nested_record_with_only_nested_values_is_kept(owner):
    permitted = ProjectPolicy(owner, make_project(ProjectState.online)).permitted_attributes()
    params = {"rewards_attributes": {"shipping_fees_attributes": {"0": {"value": 5, "destination": "x"}}}}
    assert permit_params(params, permitted) == params


def test_index_keys_may_be_negative_or_timestamps():
    permitted = [{"posts_attributes": ["title"]}]
    params = {"posts_attributes": {"-1": {"title": "a"}, "1700000000": {"title": "b", "id": 3}}}
    assert permit_params(params, permitted) == {
        "posts_attributes": {"-1": {"title": "a"}, "1700000000": {"title": "b"}}
    }


def test_stranger_cannot_change_service_fee_or_state(stranger):
    policy = ProjectPolicy(stranger, make_project(ProjectState.online))
    params = {"service_fee": 0.01, "state": "successful", "headline": "new"}
    assert permit_params(params, policy.permitted_attributes()) == {"headline": "new"}


def test_owner_of_draft_sets_solidarity_fee(owner):
    params = {"service_fee": "0.05", "name": "Campaign"}
    project = make_project(ProjectState.draft, integrations=(solidarity(),))
    permitted = ProjectPolicy(owner, project, params).permitted_attributes()
    assert permit_params(params, permitted) == params
