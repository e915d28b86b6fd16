"""Store Module - Candidate sources for the ranking pipeline."""
from core.store.interfaces import CandidateStore, QueryHint
from core.store.memory import InMemoryCandidateStore, candidate_from_record, user_from_record

__all__ = ['CandidateStore', 'QueryHint', 'InMemoryCandidateStore', 'candidate_from_record', 'user_from_record']
