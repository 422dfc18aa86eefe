# routers/auth.py
"""
Authentication routes for landlord accounts.
"""
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import verify_token
from models import User
from schemas.auth import AuthResult, SignInRequest, SignUpRequest, UserResponse
from services import auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
     "/signup",
     response_model=AuthResult,
     status_code=status.HTTP_201_CREATED,
     summary="Create a landlord account"
)
def sign_up(body: SignUpRequest, db: Session = Depends(get_session)):
     result = auth_service.sign_up(db, body)
     if result.error:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
     return result


@router.post("/signin", response_model=AuthResult, summary="Sign in")
def sign_in(body: SignInRequest, db: Session = Depends(get_session)):
     result = auth_service.sign_in(db, body)
     if result.error:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=result.error)
     return result


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT, summary="Sign out")
def sign_out(user: User = Depends(verify_token), db: Session = Depends(get_session)):
     auth_service.sign_out(db, user.id)
     return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/session", response_model=UserResponse, summary="Restore the current session")
def get_session_user(user: User = Depends(verify_token)):
     return user
