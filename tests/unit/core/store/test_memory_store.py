#!/usr/bin/env python3
"""
Unit tests for InMemoryCandidateStore and record conversion.
"""

import json
import os
import tempfile
import unittest
from datetime import timedelta

from core.exceptions import ConfigurationError, NotFoundError
from core.ranking.models import CandidateKind, ContributionType, SkillLevel
from core.store.interfaces import QueryHint
from core.store.memory import InMemoryCandidateStore, candidate_from_record, user_from_record
from tests.fixtures.corpus_fixtures import NOW, corpus_dict, make_store


class TestRecordConversion(unittest.TestCase):

    def test_opportunity_record(self):
        candidate = candidate_from_record({
            'id': 7,
            'title': 'Fix it',
            'type': 'bug_fix',
            'difficulty': 'Advanced',
            'estimated_hours': '3',
            'created_at': '2026-10-16T10:00:00Z',
        }, CandidateKind.OPPORTUNITY)

        self.assertEqual(candidate.id, '7')
        self.assertEqual(candidate.contribution_type, ContributionType.BUG_FIX)
        self.assertEqual(candidate.difficulty, SkillLevel.ADVANCED)
        self.assertEqual(candidate.estimated_hours, 3.0)
        self.assertEqual(candidate.status, 'open')
        self.assertEqual(candidate.created_at.hour, 10)

    def test_repository_defaults_to_active(self):
        candidate = candidate_from_record({'id': 'r', 'name': 'repo'}, CandidateKind.REPOSITORY)
        self.assertEqual(candidate.title, 'repo')
        self.assertEqual(candidate.status, 'active')

    def test_user_record(self):
        user = user_from_record({'id': 'u', 'skill_level': 'expert', 'availability_hours': 5,
                                 'contributed_repository_ids': [1, 2]})
        self.assertEqual(user.skill_level, SkillLevel.EXPERT)
        self.assertEqual(user.contributed_repository_ids, ['1', '2'])

    def test_unknown_skill_level(self):
        with self.assertRaises(ConfigurationError):
            user_from_record({'id': 'u', 'skill_level': 'wizard'})


class TestInMemoryCandidateStore(unittest.TestCase):

    def setUp(self):
        self.store = make_store()

    def test_fetch_filters_status(self):
        ids = [c.id for c in self.store.fetch_candidates(QueryHint(kind=CandidateKind.OPPORTUNITY))]
        self.assertEqual(ids, ['opp-1', 'opp-3', 'opp-4'])

    def test_fetch_without_status_filter(self):
        hint = QueryHint(kind=CandidateKind.OPPORTUNITY, status=None)
        self.assertEqual(len(self.store.fetch_candidates(hint)), 4)

    def test_fetch_created_after(self):
        hint = QueryHint(kind=CandidateKind.OPPORTUNITY, created_after=NOW - timedelta(hours=24))
        ids = [c.id for c in self.store.fetch_candidates(hint)]
        self.assertEqual(ids, ['opp-1', 'opp-4'])

    def test_fetch_created_after_naive_datetime(self):
        naive = (NOW - timedelta(hours=5)).replace(tzinfo=None)
        hint = QueryHint(kind=CandidateKind.OPPORTUNITY, created_after=naive)
        self.assertEqual([c.id for c in self.store.fetch_candidates(hint)], ['opp-1'])

    def test_fetch_by_id(self):
        self.assertEqual(self.store.fetch_by_id('repo-2', CandidateKind.REPOSITORY).title, 'py-ingest')
        with self.assertRaises(NotFoundError) as ctx:
            self.store.fetch_by_id('repo-9', CandidateKind.REPOSITORY)
        self.assertIn('repo-9', str(ctx.exception))

    def test_fetch_user(self):
        self.assertEqual(self.store.fetch_user('user-2').contributed_repository_ids, ['repo-1'])
        with self.assertRaises(NotFoundError):
            self.store.fetch_user('ghost')

    def test_fetch_opportunities_for_repository(self):
        ids = [c.id for c in self.store.fetch_opportunities_for_repository('repo-1')]
        self.assertEqual(ids, ['opp-1', 'opp-2', 'opp-4'])

    def test_from_json_file(self):
        with tempfile.NamedTemporaryFile('w', suffix='.json', delete=False) as f:
            json.dump(corpus_dict(), f)
            path = f.name
        try:
            store = InMemoryCandidateStore.from_json_file(path)
            self.assertEqual(len(store.fetch_candidates(QueryHint(kind=CandidateKind.USER, status=None))), 2)
        finally:
            os.remove(path)


if __name__ == '__main__':
    unittest.main()
