# services/auth_service.py
"""
Auth Service - landlord sign-up, sign-in, sign-out and session restore.

Passwords are hashed with bcrypt (passlib) and sessions are JWTs (python-jose)
carrying the user id and a session id. Signing out clears the session id on
the user row, which invalidates every token issued before.

sign_up and sign_in report failures through AuthResult.error; they do not
raise for bad credentials.
"""
import logging
import os
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session
from dotenv import load_dotenv

from models import User
from schemas.auth import AuthResult, SignInRequest, SignUpRequest, UserResponse

load_dotenv()

logger = logging.getLogger(__name__)

SECRET_KEY = os.getenv("JWT_SECRET")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

# Bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_secret_key() -> str:
     """The JWT signing key. Raises RuntimeError when JWT_SECRET is unset."""
     if not SECRET_KEY:
          raise RuntimeError("JWT_SECRET must be set")
     return SECRET_KEY


def _issue_token(user: User) -> str:
     user.session_id = secrets.token_hex(16)
     expires = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
     payload = {"sub": str(user.id), "sid": user.session_id, "exp": expires}
     return jwt.encode(payload, get_secret_key(), algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
     """Decode and verify a token. Raises JWTError when invalid or expired."""
     return jwt.decode(token, get_secret_key(), algorithms=[ALGORITHM])


def sign_up(db: Session, profile: SignUpRequest) -> AuthResult:
     email = profile.email.strip().lower()
     if db.query(User).filter(User.email == email).first():
          return AuthResult(error="An account with this email already exists")

     user = User(
          email=email,
          password=pwd_context.hash(profile.password),
          full_name=profile.full_name,
          phone=profile.phone,
          user_type="landlord",
     )
     db.add(user)
     db.flush()
     token = _issue_token(user)
     db.flush()
     logger.info("Registered user %s", user.id)
     return AuthResult(user=UserResponse.model_validate(user), token=token)


def sign_in(db: Session, credential: SignInRequest) -> AuthResult:
     email = credential.email.strip().lower()
     user = db.query(User).filter(User.email == email).first()
     if not user or not pwd_context.verify(credential.password, user.password):
          logger.warning("Failed sign-in for %s", email)
          return AuthResult(error="Invalid email or password")

     token = _issue_token(user)
     db.flush()
     return AuthResult(user=UserResponse.model_validate(user), token=token)


def sign_out(db: Session, user_id: int) -> None:
     user = db.get(User, user_id)
     if user is not None:
          user.session_id = None
          db.flush()
          logger.info("Signed out user %s", user_id)


def restore_session(db: Session, token: str) -> Optional[User]:
     """Return the user a token belongs to, or None if the session is gone."""
     try:
          payload = decode_token(token)
     except JWTError:
          return None

     try:
          user_id = int(payload.get("sub"))
     except (TypeError, ValueError):
          return None

     user = db.get(User, user_id)
     if user is None or not user.session_id or user.session_id != payload.get("sid"):
          return None
     return user
