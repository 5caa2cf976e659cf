"""
User profile and potential score API routes.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from backend.src.adapters.inbound.api.dependencies import get_current_identity, require_owner
from backend.src.application.dto.profile_update import ProfileUpdate
from backend.src.core.entities.identity import AuthenticatedIdentity
from backend.src.core.entities.user import User
from backend.src.core.exceptions import UserNotFoundError
from backend.src.core.value_objects.score_breakdown import ScoreBreakdown

router = APIRouter()


class PreferencesPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    theme: Optional[str] = None
    notifications: Optional[bool] = None


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    email: Optional[str] = None


class UpdateProfileRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    email: Optional[str] = None
    preferences: Optional[PreferencesPayload] = None

    def to_update(self) -> ProfileUpdate:
        prefs = self.preferences or PreferencesPayload()
        return ProfileUpdate(
            name=self.name,
            email=self.email,
            theme=prefs.theme,
            notifications=prefs.notifications,
        )


class RatingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Range is checked by ScoringService so the error body matches other 400s
    # strict keeps "4" and true out; JSON integers still validate as floats
    rating: float = Field(strict=True, allow_inf_nan=False)


def _parse_limit(raw: Optional[str]) -> Optional[int]:
    """Unparsable limits fall back to the default page size."""
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _iso(epoch_ms: Optional[int]) -> Optional[str]:
    if not epoch_ms:
        return None
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc).isoformat().replace("+00:00", "Z")


def _score_details(user: User, breakdown: ScoreBreakdown) -> dict:
    return {
        "rating": user.total_average_weight_ratings or 0,
        "rents": user.number_of_rents or 0,
        "recentlyActive": _iso(user.recently_active),
        "score": user.potential_score or 0.0,
        "components": breakdown.components,
    }


def _user_body(user: User, breakdown: Optional[ScoreBreakdown] = None) -> dict:
    body = user.to_document()
    if breakdown is not None:
        body["potentialScoreDetails"] = _score_details(user, breakdown)
    return body


def _services(request: Request):
    return request.app.state.container


# Static paths are declared before "/{user_id}" so they are matched first.

@router.get("/high-potential")
async def get_high_potential_users(
    request: Request,
    limit: Optional[str] = Query(default=None),
    last_doc_id: Optional[str] = Query(default=None, alias="lastDocId"),
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    container = _services(request)
    page = await container.leaderboard_service().get_top_users(
        limit=_parse_limit(limit), cursor=last_doc_id
    )
    scoring = container.scoring_service()
    return {
        "users": [_user_body(u, scoring.score_details(u)) for u in page.users],
        "pagination": {
            "hasMore": page.has_more,
            "nextPageToken": page.next_cursor,
        },
    }


@router.post("/{user_id}/recalculate-score")
async def recalculate_score(
    user_id: str,
    request: Request,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    require_owner(identity, user_id)
    user = await _services(request).scoring_service().recalculate_score(user_id)
    return {"message": "Potential score recalculated successfully", "user": _user_body(user)}


@router.post("/{user_id}/rating")
async def add_rating(
    user_id: str,
    body: RatingRequest,
    request: Request,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    require_owner(identity, user_id)
    user = await _services(request).scoring_service().record_rating(user_id, body.rating)
    return {"message": "Rating recorded successfully", "user": _user_body(user)}


@router.post("/{user_id}/activity")
async def record_activity(
    user_id: str,
    request: Request,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    require_owner(identity, user_id)
    user = await _services(request).scoring_service().touch_activity(user_id)
    return {"message": "Activity recorded successfully", "user": _user_body(user)}


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    request: Request,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    """Fetch the caller's profile, creating it on first access."""
    require_owner(identity, user_id)
    container = _services(request)
    user, created = await container.user_service().get_or_create_user(
        user_id, email=identity.email, name=identity.name
    )
    body = _user_body(user, container.scoring_service().score_details(user))
    return JSONResponse(status_code=201 if created else 200, content=body)


@router.post("/{user_id}", status_code=201)
async def register_user(
    user_id: str,
    body: RegisterRequest,
    request: Request,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    require_owner(identity, user_id)
    user, _ = await _services(request).user_service().register_user(
        user_id, name=body.name or "", email=body.email or ""
    )
    return _user_body(user)


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    body: UpdateProfileRequest,
    request: Request,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    require_owner(identity, user_id)
    user = await _services(request).user_service().update_profile(user_id, body.to_update())
    return _user_body(user)


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    request: Request,
    identity: AuthenticatedIdentity = Depends(get_current_identity),
):
    require_owner(identity, user_id)
    deleted = await _services(request).user_service().delete_user(user_id)
    if not deleted:
        raise UserNotFoundError(user_id)
    return {"message": "User deleted successfully", "id": user_id}
