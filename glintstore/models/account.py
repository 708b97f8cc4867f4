from sqlalchemy import Boolean, CheckConstraint, Column, Text, false, text

from glintstore.models.database import Base, IdType


class Account(Base):
    __tablename__ = "account"
    __table_args__ = (
        CheckConstraint("username <> ''", name="account_username_not_empty"),
        {"sqlite_autoincrement": True},
    )

    id = Column(IdType, primary_key=True, autoincrement=True)
    username = Column(Text, unique=True, nullable=False)
    fullname = Column(Text, nullable=False, default="", server_default=text("''"))
    email = Column(Text, nullable=False, default="", server_default=text("''"))
    # '' means no credential set: authentication always fails
    password_hash = Column(Text, nullable=False, default="", server_default=text("''"))
    disabled = Column(Boolean, nullable=False, default=False, server_default=false())
