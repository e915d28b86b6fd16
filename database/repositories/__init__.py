from database.repositories.base import BaseRepository
from database.repositories.candidate import SqlCandidateStore

__all__ = [
    'BaseRepository',
    'SqlCandidateStore',
]
