from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text, ForeignKey, func
from sqlalchemy.orm import relationship
from core.base import Base


class PathwayModel(Base):
    """SQLAlchemy model for a pathway (route between two nodes)."""

    __tablename__ = "pathways"

    id = Column(Integer, primary_key=True, autoincrement=True)
    origin_node_id = Column(Integer, ForeignKey("nodes.id"), nullable=False, index=True)
    destination_node_id = Column(Integer, ForeignKey("nodes.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    code = Column(String(50), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    is_sellable = Column(Boolean, nullable=False, default=False)
    is_empty_trip = Column(Boolean, nullable=False, default=False)
    active = Column(Boolean, nullable=False, default=False, index=True)

    created_at = Column(DateTime, nullable=True, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime, nullable=True, index=True)

    # Relationships
    origin_node = relationship("NodeModel", foreign_keys=[origin_node_id])
    destination_node = relationship("NodeModel", foreign_keys=[destination_node_id])

    def __repr__(self):
        return f"<Pathway {self.id} {self.code}>"
