import uuid

from sqlalchemy import Column, Integer, Text, TIMESTAMP, Numeric, Index, func
from sqlalchemy.sql import text as sql_text
from sqlalchemy.dialects.postgresql import UUID, ARRAY
from sqlalchemy.orm import relationship
from pgvector.sqlalchemy import Vector

from .base import Base


class Repository(Base):
    """
    A GitHub repository that publishes contribution opportunities.

    Health sub-scores are stored on a 0-100 scale and converted to unit
    scores when loaded into the ranking core.
    """
    __tablename__ = 'repositories'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    github_id = Column(Integer, unique=True)
    full_name = Column(Text, nullable=False, unique=True)
    name = Column(Text, nullable=False)
    description = Column(Text)
    url = Column(Text)
    language = Column(Text)
    topics = Column(ARRAY(Text), nullable=False, default=list)

    status = Column(Text, nullable=False, default='active')  # active|archived|private
    stars_count = Column(Integer, nullable=False, default=0)
    forks_count = Column(Integer, nullable=False, default=0)

    # Health scoring (0-100)
    health_score = Column(Numeric(5, 2), default=0)
    activity_score = Column(Numeric(5, 2), default=0)
    community_score = Column(Numeric(5, 2), default=0)
    documentation_score = Column(Numeric(5, 2), default=0)
    contributor_friendliness = Column(Integer, default=50)

    description_embedding = Column(Vector(1536))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"), onupdate=func.now())

    opportunities = relationship("Opportunity", back_populates="repository", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_repositories_status', 'status'),
        Index('idx_repositories_stars', 'stars_count'),
        Index('idx_repositories_description_embedding_hnsw', 'description_embedding', postgresql_using='hnsw', postgresql_with={'m': 16, 'ef_construction': 64}, postgresql_ops={'description_embedding': 'vector_cosine_ops'}),
    )
