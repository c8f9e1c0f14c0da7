from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.user import UserResponse, UserCreate, UserUpdate
from app.services import assets
from typing import List

router = APIRouter(prefix="/api/v1/users", tags=["users"])

@router.get("/", response_model=List[UserResponse])
def get_users(db: Session = Depends(get_db)):
    """Get all users"""
    return assets.users(db).list()

@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, db: Session = Depends(get_db)):
    """Get user by ID"""
    return assets.users(db).get_by_id(user_id)

@router.post("/", response_model=UserResponse, status_code=201)
def create_user(user: UserCreate, db: Session = Depends(get_db)):
    """Create new user, the password is stored as a bcrypt hash"""
    return assets.create_user(db, user.model_dump())

@router.patch("/{user_id}", response_model=UserResponse)
def update_user(user_id: str, changes: UserUpdate, db: Session = Depends(get_db)):
    """Update only the supplied fields of a user"""
    return assets.update_user(db, user_id, changes.model_dump(exclude_unset=True))

@router.delete("/{user_id}")
def delete_user(user_id: str, db: Session = Depends(get_db)):
    """Delete user, refused while devices are assigned to it"""
    return {"id": assets.delete_user(db, user_id)}
