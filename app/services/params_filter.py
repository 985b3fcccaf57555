# app/services/params_filter.py
from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Sequence

logger = logging.getLogger(__name__)

INDEX_KEY = re.compile(r"-?\d+")
SCALAR_TYPES = (str, int, float, bool, date, datetime, type(None))


def _split(permitted: Sequence[Any]):
    scalars = set()
    nested: Dict[str, List[Any]] = {}
    for key in permitted:
        if isinstance(key, Mapping):
            for name, sub in key.items():
                nested[name] = list(sub)
        else:
            scalars.add(key)
    return scalars, nested


def _is_index_keyed(value: Mapping[str, Any]) -> bool:
    # form params: {"0": {...}, "1": {...}}; a single record has field names
    return bool(value) and all(
        INDEX_KEY.fullmatch(str(k)) and isinstance(v, Mapping) for k, v in value.items()
    )


def _is_scalar(value: Any) -> bool:
    if isinstance(value, SCALAR_TYPES):
        return True
    if isinstance(value, (list, tuple)):
        return all(isinstance(v, SCALAR_TYPES) for v in value)
    return False


def _filter_nested(value: Any, sub_permitted: List[Any]) -> Any:
    if isinstance(value, Mapping):
        if _is_index_keyed(value):
            return {k: permit_params(v, sub_permitted) for k, v in value.items()}
        return permit_params(value, sub_permitted)
    if isinstance(value, (list, tuple)):
        return [permit_params(v, sub_permitted) for v in value if isinstance(v, Mapping)]
    return None


def permit_params(params: Mapping[str, Any], permitted: Sequence[Any]) -> Dict[str, Any]:
    """
    Keeps only whitelisted keys of `params`. Nested groups are filtered
    recursively; a scalar key only takes a scalar or a list of scalars.
    Anything else is dropped silently.
    """
    scalars, nested = _split(permitted)
    out: Dict[str, Any] = {}
    dropped: List[str] = []

    for key, value in params.items():
        if key in nested:
            filtered = _filter_nested(value, nested[key])
            if filtered is None:
                dropped.append(key)
            else:
                out[key] = filtered
        elif key in scalars and _is_scalar(value):
            out[key] = value
        else:
            dropped.append(key)

    if dropped:
        logger.debug("unpermitted params dropped", extra={"keys": dropped})
    return out
