from sqlalchemy import Column, String, Integer, Float, Boolean, DateTime, Text, ForeignKey, Index, func, true
from core.base import Base


class PathwayOptionModel(Base):
    """SQLAlchemy model for one alternative route profile of a pathway.

    At most one live option per pathway can be the default, enforced by the
    partial unique index below (deleted rows do not count).
    """

    __tablename__ = "pathway_options"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pathway_id = Column(Integer, ForeignKey("pathways.id"), nullable=False, index=True)
    name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    distance_km = Column(Float, nullable=True)
    typical_time_min = Column(Integer, nullable=True)
    avg_speed_kmh = Column(Float, nullable=True)
    is_default = Column(Boolean, nullable=False, default=False)
    is_pass_through = Column(Boolean, nullable=False, default=False)
    pass_through_time_min = Column(Integer, nullable=True)
    sequence = Column(Integer, nullable=True, index=True)
    active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, nullable=True, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime, nullable=True, index=True)

    def __repr__(self):
        return f"<PathwayOption {self.id} pathway={self.pathway_id} default={self.is_default}>"


_single_default_where = (PathwayOptionModel.is_default == true()) & PathwayOptionModel.deleted_at.is_(None)

Index(
    "uq_pathway_options_single_default",
    PathwayOptionModel.pathway_id,
    unique=True,
    postgresql_where=_single_default_where,
    sqlite_where=_single_default_where,
)
