import uuid

from sqlalchemy import Column, Text, Integer, TIMESTAMP, ForeignKey, Index, UniqueConstraint, func
from sqlalchemy.sql import text as sql_text
from sqlalchemy.dialects.postgresql import UUID, ARRAY
from sqlalchemy.orm import relationship
from pgvector.sqlalchemy import Vector

from .base import Base


class User(Base):
    """
    Contributor profile used for personalized matching.
    """
    __tablename__ = 'users'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    github_username = Column(Text, nullable=False, unique=True)
    bio = Column(Text)

    # Preferences
    skill_level = Column(Text, nullable=False, default='intermediate')
    preferred_languages = Column(ARRAY(Text), nullable=False, default=list)
    interests = Column(ARRAY(Text), nullable=False, default=list)
    availability_hours = Column(Integer, nullable=False, default=10)
    experience_months = Column(Integer, nullable=False, default=0)

    profile_embedding = Column(Vector(1536))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"), onupdate=func.now())

    contributions = relationship("Contribution", back_populates="user", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_users_profile_embedding_hnsw', 'profile_embedding', postgresql_using='hnsw', postgresql_with={'m': 16, 'ef_construction': 64}, postgresql_ops={'profile_embedding': 'vector_cosine_ops'}),
    )


class Contribution(Base):
    """
    A user's contribution to a repository, optionally through an opportunity.
    """
    __tablename__ = 'contributions'

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    repository_id = Column(UUID(as_uuid=True), ForeignKey('repositories.id', ondelete='CASCADE'), nullable=False)
    opportunity_id = Column(UUID(as_uuid=True), ForeignKey('opportunities.id', ondelete='SET NULL'))
    status = Column(Text, nullable=False, default='merged')  # merged|closed|open

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=sql_text("timezone('UTC', now())"))

    user = relationship("User", back_populates="contributions")

    __table_args__ = (
        UniqueConstraint('user_id', 'opportunity_id', name='uq_contributions_user_opportunity'),
        Index('idx_contributions_user', 'user_id'),
    )
