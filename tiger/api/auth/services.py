import logging
from typing import Optional

from sqlalchemy.orm import Session

from tiger.core import hashing
from tiger.db.models.user import User
from tiger.db.session import transaction
from . import schemas

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def create_user(db: Session, user: schemas.UserCreate) -> User:
    new_user = User(
        email=user.email,
        name=user.name,
        hashed_password=hashing.hash_password(user.password),
    )
    with transaction(db):
        db.add(new_user)
    db.refresh(new_user)
    logger.info("Registered user %s", new_user.id)
    return new_user


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    db_user = get_user_by_email(db, email)
    if not db_user or not hashing.verify_password(password, db_user.hashed_password):
        logger.info("Failed login for %s", email)
        return None
    if hashing.needs_rehash(db_user.hashed_password):
        with transaction(db):
            db_user.hashed_password = hashing.hash_password(password)
    return db_user
