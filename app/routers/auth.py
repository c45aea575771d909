from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.core.current_user import Identity, end_session, get_current_identity, start_session
from app.core.deps import get_db
from app.core.errors import Unauthorized
from app.schemas.auth import LoginRequest, LoginResponse, SessionInfo, SignupRequest
from app.schemas.common import SuccessResponse
from app.services import accounts

router = APIRouter()


@router.post(
    "/signup",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Missing fields, or username or email already exists"},
    },
)
def signup(payload: SignupRequest, db: Session = Depends(get_db)):
    accounts.create_student(
        db,
        username=payload.username,
        password=payload.password,
        email=payload.email,
    )
    return SuccessResponse(message="Registration successful")


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        status.HTTP_401_UNAUTHORIZED: {"description": "Invalid credentials"},
    },
)
def login(payload: LoginRequest, request: Request, db: Session = Depends(get_db)):
    user = accounts.authenticate(db, payload.username, payload.password)
    if user is None:
        raise Unauthorized("Invalid credentials")

    identity = start_session(request, user)
    return LoginResponse(role=identity.role, username=identity.username)


@router.post("/logout", response_model=SuccessResponse, response_model_exclude_none=True)
def logout(request: Request):
    end_session(request)
    return SuccessResponse()


@router.get("/session", response_model=SessionInfo, response_model_exclude_none=True)
def session_info(identity: Identity = Depends(get_current_identity)):
    if not identity.is_authenticated:
        return SessionInfo(loggedIn=False)
    return SessionInfo(loggedIn=True, role=identity.role, username=identity.username)
