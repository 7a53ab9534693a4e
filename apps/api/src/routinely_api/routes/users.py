from fastapi import APIRouter, Depends, HTTPException, status
import logging
from sqlalchemy.orm import Session
from routinely_core.config import Settings
from routinely_core.models import User
from routinely_core.auth import (
    hash_password,
    authenticate_user,
    create_access_token,
    decode_token,
    ExpiredSignatureError,
    JWTError,
    oauth2_scheme,
    get_current_user,
    get_db,
)
from ..schemas import UserCreateRequest, UserLoginRequest, UserOut

router = APIRouter(prefix="/users", tags=["users"])
log = logging.getLogger("routinely_api")
auth_log = logging.getLogger("routinely_api.auth")

settings = Settings()


@router.post("/", response_model=UserOut, status_code=status.HTTP_201_CREATED)
@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_user(request: UserCreateRequest, db: Session = Depends(get_db)):
    if not settings.allow_signup:
        auth_log.warning("user.create denied: signup disabled username=%s", request.username)
        raise HTTPException(status_code=403, detail="Signup is disabled")
    if db.query(User).filter(User.username == request.username).first():
        log.warning("user.create conflict: username exists username=%s", request.username)
        raise HTTPException(status_code=400, detail="Username already exists")
    user = User(username=request.username, password_hash=hash_password(request.password))
    db.add(user)
    db.commit()
    db.refresh(user)
    log.info("user.create ok: id=%s username=%s", user.id, user.username)
    return user

@router.post("/login")
@router.post("/login/", include_in_schema=False)
def login(request: UserLoginRequest, db: Session = Depends(get_db)):
    user = authenticate_user(request.username, request.password, db)
    if not user:
        auth_log.warning("user.login fail: username=%s", request.username)
        raise HTTPException(status_code=401, detail="Invalid username or password")
    token = create_access_token({"sub": user.username})
    auth_log.info("user.login ok: id=%s username=%s", user.id, user.username)
    return {"access_token": token, "token_type": "bearer"}

@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return user

@router.post("/validate")
@router.post("/validate/", include_in_schema=False)
def validate_token(token: str = Depends(oauth2_scheme)):
    try:
        payload = decode_token(token)
    except ExpiredSignatureError:
        auth_log.warning("user.validate expired")
        raise HTTPException(status_code=401, detail="Token expired. Please sign in again.")
    except JWTError:
        auth_log.warning("user.validate invalid")
        raise HTTPException(status_code=401, detail="Invalid token.")
    auth_log.info("user.validate ok: sub=%s", payload.get("sub"))
    return {"valid": True, "payload": payload}
