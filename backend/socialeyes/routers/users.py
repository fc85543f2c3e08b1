"""User API routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from socialeyes.database import get_db
from socialeyes.models.user import User
from socialeyes.schemas.user import UserCreate, UserOut
from socialeyes.services.outcomes import BadRequest, NotFound, raise_for, USER_NOT_FOUND

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Create a new user. Email and username must be unique."""
    taken = {}
    if db.query(User).filter(User.email == payload.email).first():
        taken["email"] = "User with that email already exists"
    if db.query(User).filter(User.username == payload.username).first():
        taken["username"] = "User with that username already exists"
    if taken:
        raise_for(BadRequest(message="User already exists", errors=taken))

    user = User(**payload.model_dump())
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s (%s)", user.id, user.username)
    return user


@router.get("/", response_model=list[UserOut])
def list_users(db: Session = Depends(get_db)):
    """List all users."""
    return db.query(User).order_by(User.id).all()


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, db: Session = Depends(get_db)):
    """Fetch a single user by ID."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise_for(NotFound(USER_NOT_FOUND))
    return user
