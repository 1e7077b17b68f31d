from typing import Optional

from sqlalchemy.orm import Session

from shared.models.users import Users


def get_user_by_id(db: Session, user_id: int) -> Optional[Users]:
    return db.query(Users).filter(Users.id == user_id).first()

