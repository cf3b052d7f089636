from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, Index, func
from core.base import Base


class PathwayOptionTollModel(Base):
    """SQLAlchemy model for a toll booth stop on a pathway option, ordered by sequence."""

    __tablename__ = "pathway_option_tolls"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pathway_option_id = Column(Integer, ForeignKey("pathway_options.id"), nullable=False, index=True)
    node_id = Column(Integer, ForeignKey("nodes.id"), nullable=False, index=True)
    sequence = Column(Integer, nullable=False)  # 1-based position on the route
    pass_time_min = Column(Integer, nullable=False)  # Minutes to clear the booth
    distance = Column(Float, nullable=True)  # Distance from origin

    created_at = Column(DateTime, nullable=True, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index(
            "uq_pathway_option_tolls_option_sequence",
            "pathway_option_id",
            "sequence",
            unique=True,
        ),
    )

    def __repr__(self):
        return f"<PathwayOptionToll option={self.pathway_option_id} #{self.sequence} node={self.node_id}>"
