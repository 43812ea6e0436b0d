"""Success envelope shared by all routes.

``{success, data?, count?, pagination?, meta?}``; keys that carry no value
are left out. Nested models are serialized with their camelCase aliases.
"""

from typing import Any, Optional

from pydantic import BaseModel


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [_dump(item) for item in value]
    if isinstance(value, dict):
        return {key: _dump(item) for key, item in value.items()}
    return value


def envelope(
    data: Any = None,
    *,
    count: Optional[int] = None,
    pagination: Optional[BaseModel] = None,
    meta: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Wrap a successful result."""
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = _dump(data)
    if count is not None:
        body["count"] = count
    if pagination is not None:
        body["pagination"] = _dump(pagination)
    if meta is not None:
        body["meta"] = _dump(meta)
    return body
