"""
Applications Repository

REST calls for admission applications and the signed-in user's profile.
Payload construction lives in ``helpers``; orchestration in ``service``.
"""

from typing import Any

from admission_wizard.core.http import ApiClient
from admission_wizard.modules.wizard.helpers import serialize
from admission_wizard.modules.wizard.schemas import (
    ApplicationCreateRequest,
    ApplicationCreatedResponse,
    ApplicationUpdateRequest,
)


def _unwrap(body: Any, *keys: str) -> Any:
    # Responses sometimes come wrapped in {"data": ...} or {"user": ...}
    if isinstance(body, dict):
        for key in keys:
            if isinstance(body.get(key), dict):
                return body[key]
    return body


async def create_application(
    client: ApiClient, payload: ApplicationCreateRequest
) -> ApplicationCreatedResponse:
    """Create a new application from the flat payload."""
    body = await client.post("/applications", json=serialize(payload))
    return ApplicationCreatedResponse.model_validate(_unwrap(body, "data", "application"))


async def update_application(
    client: ApiClient, application_id: int, payload: ApplicationUpdateRequest
) -> Any:
    """Replace an existing application with the nested payload."""
    return await client.put(f"/applications/{application_id}", json=serialize(payload))


async def get_application(client: ApiClient, application_id: int) -> dict[str, Any]:
    """Fetch an application in its nested form."""
    body = await client.get(f"/applications/{application_id}")
    return _unwrap(body, "data", "application") or {}


async def get_current_user_profile(client: ApiClient) -> dict[str, Any]:
    """Fetch the profile of the signed-in user."""
    body = await client.get("/users/me")
    return _unwrap(body, "user", "data") or {}
