import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError
from app.core.security import hash_password, verify_password
from app.models.user import ROLE_STUDENT, User

logger = logging.getLogger(__name__)


def create_student(db: Session, username: str, password: str, email: str) -> User:
    existing = (
        db.query(User)
        .filter((User.username == username) | (User.email == email))
        .first()
    )
    if existing:
        raise ConflictError("Username or email already exists")

    user = User(
        username=username,
        email=email,
        hashed_password=hash_password(password),
        role=ROLE_STUDENT,
    )
    db.add(user)

    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent signup
        db.rollback()
        raise ConflictError("Username or email already exists")

    db.refresh(user)
    logger.info("New student account %r", user.username)
    return user


def authenticate(db: Session, username: str, password: str) -> User | None:
    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


def list_students(db: Session) -> list[User]:
    return db.query(User).filter(User.role == ROLE_STUDENT).order_by(User.id.asc()).all()
