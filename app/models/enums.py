#app/models/enums.py
from __future__ import annotations
from enum import Enum


class ProjectState(str, Enum):
    # campaign lifecycle
    draft = "draft"
    in_analysis = "in_analysis"
    approved = "approved"
    rejected = "rejected"
    online = "online"
    waiting_funds = "waiting_funds"
    successful = "successful"
    failed = "failed"
    deleted = "deleted"


class ProjectAction(str, Enum):
    create = "create"
    update = "update"
    publish = "publish"
    publish_by_steps = "publish_by_steps"
    validate_publish = "validate_publish"
    push_to_online = "push_to_online"
