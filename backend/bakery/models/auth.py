from __future__ import annotations

from ..extensions import db
from bakery.time_utils import to_utc_z, utcnow

ROLE_STUDENT = "student"
ROLE_ADMIN = "admin"
ROLES = (ROLE_STUDENT, ROLE_ADMIN)


class User(db.Model):
    """
    Student and administrator accounts.

    Profile fields are set at registration; the role only changes through
    the admin CLI.
    """
    __tablename__ = "users"
    __table_args__ = (
        db.CheckConstraint("role IN ('student', 'admin')", name="ck_users_role"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), nullable=False, unique=True, index=True)

    # Bcrypt hashed password
    password_hash = db.Column(db.String(255), nullable=False)

    full_name = db.Column(db.String(255), nullable=False)
    classroom = db.Column(db.String(64), nullable=True)
    contact = db.Column(db.String(64), nullable=True)
    role = db.Column(db.String(16), nullable=False, default=ROLE_STUDENT)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r} role={self.role}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "fullName": self.full_name,
            "classroom": self.classroom,
            "contact": self.contact,
            "role": self.role,
            "createdAt": to_utc_z(self.created_at),
        }
