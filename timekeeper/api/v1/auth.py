"""
Authentication routes (register, login, logout)
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from timekeeper.api.deps import get_db, get_current_user
from timekeeper.auth import RegisterUserUseCase, login_user
from timekeeper.infrastructure.db.models import User


router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


class CredentialsRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: int
    email: str


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(req: CredentialsRequest, db: Session = Depends(get_db)):
    """Create an account"""
    user_id = RegisterUserUseCase(db).execute(email=req.email, password=req.password)
    user = db.query(User).filter(User.id == user_id).first()
    return UserResponse(id=user.id, email=user.email)


@router.post("/login", response_model=UserResponse)
def login(request: Request, req: CredentialsRequest, db: Session = Depends(get_db)):
    """Check credentials and open a session"""
    user = login_user(db, req.email, req.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    request.session["user_id"] = user.id
    return UserResponse(id=user.id, email=user.email)


@router.post("/logout")
def logout(request: Request):
    """Close the session"""
    request.session.clear()
    return {"status": "logged_out"}


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    return UserResponse(id=user.id, email=user.email)
