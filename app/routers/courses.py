from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.current_user import Identity
from app.core.deps import get_db
from app.core.permissions import require_admin, require_auth
from app.schemas.common import SuccessResponse
from app.schemas.course import CourseCreate, CourseRead, CourseUpdate
from app.services import catalog, enrollment

router = APIRouter()


@router.get("", response_model=list[CourseRead])
def list_courses(
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_auth),
):
    return catalog.list_courses(db)


@router.post(
    "",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    responses={400: {"description": "Course code already exists"}},
)
def create_course(
    payload: CourseCreate,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    course = catalog.create_course(db, payload)
    return SuccessResponse(id=course.id)


@router.put(
    "/{course_id}",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Capacity below current enrollment"},
        404: {"description": "Course not found"},
    },
)
def update_course(
    course_id: int,
    payload: CourseUpdate,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    catalog.update_course(db, course_id, payload)
    return SuccessResponse()


@router.delete(
    "/{course_id}",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    responses={404: {"description": "Course not found"}},
)
def delete_course(
    course_id: int,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    # registrations go first, then the course
    enrollment.delete_course(db, course_id)
    return SuccessResponse()
