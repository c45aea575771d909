# Import every model so Base.metadata knows all tables (used by init_db, alembic and tests)
from app.db.base_class import Base  # noqa: F401
from app.models.course import Course  # noqa: F401
from app.models.registration import Registration  # noqa: F401
from app.models.user import User  # noqa: F401
