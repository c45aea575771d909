"""
Enrollment engine: capacity, schedule conflicts and the enrolled counter.

``Course.enrolled`` is a cached count of the course's Registration rows.
Every function here that adds or removes registrations changes the counter
in the same transaction, while holding the per-student and per-course locks
from ``app.services.locks``. State is always re-read after the locks are
taken, so a caller that waited sees what the previous writer committed.
"""

import logging

from sqlalchemy import case, delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.current_user import Identity
from app.core.errors import (
    AlreadyRegistered,
    CourseFull,
    Forbidden,
    NotFound,
    ScheduleConflict,
    Unauthorized,
)
from app.db.session import transaction
from app.models.course import Course
from app.models.registration import Registration
from app.services.locks import course_lock, registry, student_course_locks
from app.services.schedule import times_overlap

logger = logging.getLogger(__name__)


def _locked_course(db: Session, course_id: int) -> Course | None:
    # FOR UPDATE is ignored by SQLite; the in-process locks cover it there
    return (
        db.query(Course)
        .populate_existing()
        .with_for_update()
        .filter(Course.id == course_id)
        .first()
    )


def find_conflict(db: Session, student_id: int, course: Course) -> Course | None:
    """First course the student is registered in that clashes with ``course``."""
    candidates = (
        db.query(Course)
        .join(Registration, Registration.course_id == Course.id)
        .filter(
            Registration.student_id == student_id,
            Course.day == course.day,
            Course.id != course.id,
        )
        .order_by(Registration.id.asc())
        .all()
    )

    for other in candidates:
        if times_overlap(other.start_time, other.end_time, course.start_time, course.end_time):
            return other
    return None


def enroll(db: Session, identity: Identity, course_id: int) -> Registration:
    if not identity.is_authenticated:
        raise Unauthorized()
    student_id = identity.user_id

    with student_course_locks(student_id, course_id), transaction(db):
        course = _locked_course(db, course_id)
        if course is None:
            raise NotFound("Course not found")

        if course.enrolled >= course.capacity:
            raise CourseFull()

        clash = find_conflict(db, student_id, course)
        if clash is not None:
            raise ScheduleConflict(clash.code, clash.day)

        existing = (
            db.query(Registration)
            .filter(
                Registration.student_id == student_id,
                Registration.course_id == course_id,
            )
            .first()
        )
        if existing is not None:
            raise AlreadyRegistered()

        registration = Registration(student_id=student_id, course_id=course_id)
        db.add(registration)
        try:
            db.flush()
        except IntegrityError as exc:
            raise AlreadyRegistered() from exc

        course.enrolled = Course.enrolled + 1

    logger.info("User %s enrolled in course %s", student_id, course_id)
    return registration


def drop(db: Session, identity: Identity, registration_id: int) -> None:
    if not identity.is_authenticated:
        raise Unauthorized()

    registration = db.get(Registration, registration_id)
    if registration is None:
        raise NotFound("Registration not found")
    if not identity.is_admin and registration.student_id != identity.user_id:
        raise Forbidden()

    student_id = registration.student_id
    course_id = registration.course_id

    with student_course_locks(student_id, course_id), transaction(db):
        registration = (
            db.query(Registration)
            .populate_existing()
            .filter(Registration.id == registration_id)
            .first()
        )
        # another request dropped it while we waited for the locks
        if registration is None:
            raise NotFound("Registration not found")

        course = _locked_course(db, course_id)
        db.delete(registration)

        if course is not None:
            if course.enrolled <= 0:
                logger.warning(
                    "Course %s enrolled counter already %s on drop of registration %s; keeping it at 0",
                    course_id,
                    course.enrolled,
                    registration_id,
                )
            course.enrolled = case((Course.enrolled > 0, Course.enrolled - 1), else_=0)

    logger.info(
        "Registration %s (user %s, course %s) dropped by user %s",
        registration_id,
        student_id,
        course_id,
        identity.user_id,
    )


def delete_course(db: Session, course_id: int) -> None:
    """Delete a course together with every registration that references it."""
    with course_lock(course_id), transaction(db):
        course = _locked_course(db, course_id)
        if course is None:
            raise NotFound("Course not found")

        removed = db.execute(
            delete(Registration).where(Registration.course_id == course_id)
        ).rowcount
        db.execute(delete(Course).where(Course.id == course_id))

    db.expunge_all()
    registry.forget("course", course_id)
    logger.info("Deleted course %s and %s registration(s)", course_id, removed)


def recount(db: Session, course_id: int) -> int:
    """Reset ``enrolled`` from the Registration rows and return the new value."""
    with course_lock(course_id), transaction(db):
        course = _locked_course(db, course_id)
        if course is None:
            raise NotFound("Course not found")

        actual = (
            db.query(func.count(Registration.id))
            .filter(Registration.course_id == course_id)
            .scalar()
        )
        if actual != course.enrolled:
            logger.warning(
                "Course %s enrolled counter was %s, actual registrations %s",
                course_id,
                course.enrolled,
                actual,
            )
        course.enrolled = actual

    return actual
