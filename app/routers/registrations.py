from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.current_user import Identity
from app.core.deps import get_db
from app.core.permissions import require_auth
from app.schemas.common import SuccessResponse
from app.schemas.registration import RegistrationCreate, RegistrationRow
from app.services import catalog, enrollment

router = APIRouter()


@router.get("", response_model=list[RegistrationRow])
def list_registrations(
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
):
    return catalog.list_registrations(db, identity)


@router.post(
    "",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Course full, schedule conflict or already registered"},
        404: {"description": "Course not found"},
    },
)
def enroll(
    payload: RegistrationCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
):
    registration = enrollment.enroll(db, identity, payload.course_id)
    return SuccessResponse(id=registration.id)


@router.delete(
    "/{registration_id}",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    responses={
        403: {"description": "Registration belongs to another student"},
        404: {"description": "Registration not found"},
    },
)
def drop(
    registration_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
):
    enrollment.drop(db, identity, registration_id)
    return SuccessResponse()
