import uuid

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Boolean, Index, func
from sqlalchemy.sql import text as sql_text
from sqlalchemy.dialects.postgresql import UUID, ARRAY
from sqlalchemy.orm import relationship
from pgvector.sqlalchemy import Vector

from .base import Base


class Opportunity(Base):
    __tablename__ = 'opportunities'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    repository_id = Column(UUID(as_uuid=True), ForeignKey('repositories.id', ondelete='CASCADE'))

    # GitHub issue / PR details
    github_issue_number = Column(Integer)
    title = Column(Text, nullable=False)
    description = Column(Text)
    url = Column(Text)
    labels = Column(ARRAY(Text), nullable=False, default=list)

    # Classification
    type = Column(Text, nullable=False, default='other')  # bug_fix|feature|documentation|testing|refactoring|other
    status = Column(Text, nullable=False, default='open')  # open|in_progress|completed|closed
    difficulty = Column(Text, nullable=False, default='intermediate')
    estimated_hours = Column(Integer)
    priority = Column(Integer, nullable=False, default=3)  # 1 = highest

    # Skill requirements
    required_skills = Column(ARRAY(Text), nullable=False, default=list)
    technologies = Column(ARRAY(Text), nullable=False, default=list)

    # Contribution context
    good_first_issue = Column(Boolean, nullable=False, default=False)
    help_wanted = Column(Boolean, nullable=False, default=False)
    mentorship_available = Column(Boolean, nullable=False, default=False)

    # Tracking
    view_count = Column(Integer, nullable=False, default=0)
    application_count = Column(Integer, nullable=False, default=0)
    started_at = Column(TIMESTAMP(timezone=True))
    completed_at = Column(TIMESTAMP(timezone=True))

    title_embedding = Column(Vector(1536))
    description_embedding = Column(Vector(1536))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"), onupdate=func.now())

    repository = relationship("Repository", back_populates="opportunities")

    __table_args__ = (
        Index('idx_opportunities_repository', 'repository_id'),
        Index('idx_opportunities_status_created', 'status', 'created_at'),
        Index('idx_opportunities_description_embedding_hnsw', 'description_embedding', postgresql_using='hnsw', postgresql_with={'m': 16, 'ef_construction': 64}, postgresql_ops={'description_embedding': 'vector_cosine_ops'}),
    )
