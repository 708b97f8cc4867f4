# glintstore/models/file.py
from sqlalchemy import CheckConstraint, Column, ForeignKey, Text, UniqueConstraint

from glintstore.models.database import Base, IdType


class File(Base):
    __tablename__ = "file"
    __table_args__ = (
        UniqueConstraint("account_id", "path", name="file_account_path_key"),
        CheckConstraint("path <> ''", name="file_path_not_empty"),
        CheckConstraint("data <> ''", name="file_data_not_empty"),
        {"sqlite_autoincrement": True},
    )

    id = Column(IdType, primary_key=True, autoincrement=True)
    account_id = Column(IdType, ForeignKey("account.id"), nullable=False)
    path = Column(Text, nullable=False)   # unique per owning account
    data = Column(Text, nullable=False)   # whole file content
