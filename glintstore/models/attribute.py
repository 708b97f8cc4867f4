from sqlalchemy import CheckConstraint, Column, ForeignKey, Text, UniqueConstraint, text

from glintstore.models.database import Base, IdType


class Attribute(Base):
    __tablename__ = "attribute"
    __table_args__ = (
        UniqueConstraint("file_id", "attr", name="attribute_file_attr_key"),
        CheckConstraint("attr <> ''", name="attribute_attr_not_empty"),
        {"sqlite_autoincrement": True},
    )

    id = Column(IdType, primary_key=True, autoincrement=True)
    file_id = Column(IdType, ForeignKey("file.id"), nullable=False)
    attr = Column(Text, nullable=False)
    # "metadata" is reserved on declarative classes
    value = Column("metadata", Text, nullable=False, default="", server_default=text("''"))
