from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.current_user import Identity
from app.core.deps import get_db
from app.core.permissions import require_admin
from app.schemas.user import StudentRead
from app.services import accounts, enrollment

router = APIRouter()


@router.get("/students", response_model=list[StudentRead])
def list_students(
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    return accounts.list_students(db)


@router.post("/courses/{course_id}/recount")
def recount_course(
    course_id: int,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_admin),
):
    return {"success": True, "enrolled": enrollment.recount(db, course_id)}
