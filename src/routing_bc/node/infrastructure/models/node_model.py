from sqlalchemy import Column, String, Integer, Boolean, DateTime, func
from core.base import Base


class NodeModel(Base):
    """SQLAlchemy model for a network node (terminal, stop or toll booth)."""

    __tablename__ = "nodes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(50), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    city_id = Column(Integer, nullable=True, index=True)
    is_tollbooth = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=True, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime, nullable=True, index=True)

    def __repr__(self):
        return f"<Node {self.id} {self.code}>"
