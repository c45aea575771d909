import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.current_user import Identity
from app.core.errors import CapacityBelowEnrollment, ConflictError, NotFound
from app.db.session import transaction
from app.models.course import Course
from app.models.registration import Registration
from app.models.user import User
from app.schemas.course import CourseCreate, CourseUpdate
from app.services.locks import course_lock

logger = logging.getLogger(__name__)


def list_courses(db: Session) -> list[Course]:
    return db.query(Course).order_by(Course.code.asc()).all()


def create_course(db: Session, payload: CourseCreate) -> Course:
    if db.query(Course).filter(Course.code == payload.code).first():
        raise ConflictError("Course code already exists")

    course = Course(**payload.model_dump(), enrolled=0)
    db.add(course)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Course code already exists")

    db.refresh(course)
    logger.info("Created course %s (id=%s)", course.code, course.id)
    return course


def update_course(db: Session, course_id: int, payload: CourseUpdate) -> Course:
    with course_lock(course_id), transaction(db):
        course = (
            db.query(Course)
            .populate_existing()
            .with_for_update()
            .filter(Course.id == course_id)
            .first()
        )
        if course is None:
            raise NotFound("Course not found")

        if payload.capacity < course.enrolled:
            raise CapacityBelowEnrollment(
                f"Capacity {payload.capacity} is below current enrollment {course.enrolled}"
            )

        for field, value in payload.model_dump().items():
            setattr(course, field, value)

    logger.info("Updated course %s", course_id)
    return course


def list_registrations(db: Session, identity: Identity) -> list[dict]:
    """
    Registrations joined with course and student display fields, ordered
    by course code. Admins see every row; anyone else only their own.
    """
    query = (
        db.query(
            Registration.id,
            Registration.student_id,
            Registration.course_id,
            Registration.status,
            Registration.registered_at,
            Course.code,
            Course.name,
            Course.instructor,
            Course.credits,
            Course.day,
            Course.start_time,
            Course.end_time,
            User.username,
        )
        .join(Course, Registration.course_id == Course.id)
        .join(User, Registration.student_id == User.id)
    )
    if not identity.is_admin:
        query = query.filter(Registration.student_id == identity.user_id)

    rows = query.order_by(Course.code.asc(), Registration.id.asc()).all()
    return [dict(r._mapping) for r in rows]
