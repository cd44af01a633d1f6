"""User profile API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from campus_events.database import get_db
from campus_events.models.user import Profile
from campus_events.schemas.user import ProfileCreate, ProfileOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=ProfileOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: ProfileCreate, db: Session = Depends(get_db)):
    """Create a user profile."""
    if db.query(Profile).filter(Profile.email == payload.email).first():
        raise HTTPException(status_code=409, detail="An account with this email already exists")
    user = Profile(**payload.model_dump())
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s (%s)", user.user_id, user.email)
    return user


@router.get("/", response_model=list[ProfileOut])
def list_users(db: Session = Depends(get_db)):
    """List all users."""
    return db.query(Profile).order_by(Profile.created_at).all()


@router.get("/{user_id}", response_model=ProfileOut)
def get_user(user_id: str, db: Session = Depends(get_db)):
    """Fetch a single user by ID."""
    user = db.query(Profile).filter(Profile.user_id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
