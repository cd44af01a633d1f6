"""Society and membership API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from campus_events.database import get_db
from campus_events.models.society import Society, SocietyMember, MemberRole, MemberStatus
from campus_events.models.user import Profile
from campus_events.schemas.society import (
    SocietyCreate,
    SocietyJoin,
    SocietyMemberOut,
    SocietyMemberUpdate,
    SocietyOut,
)
from campus_events.services import membership_service
from campus_events.store import EventStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=SocietyOut, status_code=status.HTTP_201_CREATED)
def create_society(payload: SocietyCreate, db: Session = Depends(get_db)):
    """Create a society. The creator is added as an approved admin."""
    creator = db.query(Profile).filter(Profile.user_id == payload.created_by).first()
    if not creator:
        raise HTTPException(status_code=404, detail="Creator user not found")
    if db.query(Society).filter(Society.slug == payload.slug).first():
        raise HTTPException(status_code=409, detail="A society with this name already exists")

    society = Society(name=payload.name, slug=payload.slug, created_by=payload.created_by)
    db.add(society)
    db.flush()

    db.add(SocietyMember(
        society_id=society.society_id,
        user_id=payload.created_by,
        role=MemberRole.admin,
        status=MemberStatus.approved,
    ))
    db.commit()
    db.refresh(society)
    logger.info("Created society '%s' (%s) by user %s", society.name, society.society_id, payload.created_by)
    return society


@router.get("/", response_model=list[SocietyOut])
def list_societies(db: Session = Depends(get_db)):
    """List all societies with their members."""
    return db.query(Society).order_by(Society.name).all()


@router.get("/{society_id}", response_model=SocietyOut)
def get_society(society_id: str, db: Session = Depends(get_db)):
    """Fetch a single society by ID with members."""
    society = db.query(Society).filter(Society.society_id == society_id).first()
    if not society:
        raise HTTPException(status_code=404, detail="Society not found")
    return society


@router.post("/{society_id}/members", response_model=SocietyMemberOut, status_code=status.HTTP_201_CREATED)
def join_society(society_id: str, payload: SocietyJoin, store: EventStore = Depends(get_store)):
    """Request to join; the membership starts pending unless the user is a platform admin."""
    return membership_service.join_society(store, society_id, payload.user_id)


@router.patch("/{society_id}/members/{user_id}", response_model=SocietyMemberOut)
def update_member(
    society_id: str,
    user_id: str,
    payload: SocietyMemberUpdate,
    actor_user_id: str = Query(..., description="ID of the society admin making the change"),
    store: EventStore = Depends(get_store),
):
    """Approve/reject a membership or change its role."""
    return membership_service.update_membership(
        store,
        society_id=society_id,
        user_id=user_id,
        actor_user_id=actor_user_id,
        role=payload.role,
        status=payload.status,
    )


@router.delete("/{society_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_member(
    society_id: str,
    user_id: str,
    actor_user_id: str = Query(..., description="The leaving user, or a society admin"),
    store: EventStore = Depends(get_store),
):
    """Leave a society, or remove a member as a society admin."""
    membership_service.remove_membership(store, society_id, user_id, actor_user_id)
