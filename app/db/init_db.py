import logging

from sqlalchemy.orm import Session

from app.core import config
from app.core.security import hash_password
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.models.user import User

logger = logging.getLogger(__name__)


def seed_admin(db: Session) -> None:
    existing = db.query(User).filter(User.username == config.DEFAULT_ADMIN_USERNAME).first()
    if existing:
        return

    db.add(
        User(
            username=config.DEFAULT_ADMIN_USERNAME,
            email=config.DEFAULT_ADMIN_EMAIL,
            hashed_password=hash_password(config.DEFAULT_ADMIN_PASSWORD),
            role="admin",
        )
    )
    db.commit()
    logger.info("Seeded default admin account %r", config.DEFAULT_ADMIN_USERNAME)


def init_db() -> None:
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_admin(db)
    finally:
        db.close()
