"""SQLAlchemy models for the users domain."""

from datetime import datetime

from extensions import db


class User(db.Model):
    """An administrated account. ``password`` only ever holds a hash."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(150), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    full_name = db.Column(db.String(255), default="", nullable=False)
    avatar_url = db.Column(db.String(500), default="", nullable=False)
    # weak reference: checked when written, not enforced by a foreign key
    role_id = db.Column(db.Integer, index=True)
    status = db.Column(db.Boolean, default=False, nullable=False)
    is_delete = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    role = db.relationship(
        "Role",
        primaryjoin="foreign(User.role_id) == Role.id",
        lazy="joined",
        viewonly=True,
    )

    def to_dict(self) -> dict:
        """Sanitised representation: the password hash never leaves the model."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "fullName": self.full_name,
            "avatarUrl": self.avatar_url,
            "role": {"id": self.role.id, "name": self.role.name} if self.role else None,
            "status": self.status,
            "isDelete": self.is_delete,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<User {self.username}>"
