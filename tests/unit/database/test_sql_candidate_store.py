#!/usr/bin/env python3
"""
Unit tests for SqlCandidateStore with a mocked Session.
"""

import uuid
import unittest
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from core.exceptions import NotFoundError
from core.ranking.models import CandidateKind, ContributionType, SkillLevel
from core.store.interfaces import QueryHint
from database.models import Opportunity, Repository, User
from database.repositories.candidate import (
    SqlCandidateStore, opportunity_to_candidate, repository_to_candidate
)

REPO_ID = uuid.UUID('11111111-1111-1111-1111-111111111111')
OPP_ID = uuid.UUID('22222222-2222-2222-2222-222222222222')
USER_ID = uuid.UUID('33333333-3333-3333-3333-333333333333')


def make_repository():
    return Repository(
        id=REPO_ID,
        name='search-kit',
        full_name='acme/search-kit',
        description='TypeScript search toolkit',
        topics=['typescript'],
        status='active',
        stars_count=1200,
        health_score=Decimal('80.00'),
        activity_score=Decimal('90.00'),
        community_score=Decimal('70.00'),
        documentation_score=Decimal('40.00'),
        contributor_friendliness=60,
        description_embedding=[0.1, 0.2],
    )


def make_opportunity():
    return Opportunity(
        id=OPP_ID,
        repository_id=REPO_ID,
        title='Fix type errors',
        description=None,
        type='bug_fix',
        status='open',
        difficulty='advanced',
        priority=2,
        required_skills=['TypeScript'],
        technologies=['TypeScript'],
        estimated_hours=6,
        good_first_issue=True,
        help_wanted=False,
        mentorship_available=False,
        view_count=12,
        application_count=3,
        created_at=datetime(2026, 10, 15, tzinfo=timezone.utc),
    )


class TestRowConversion(unittest.TestCase):

    def test_repository_scores_scaled_to_unit(self):
        candidate = repository_to_candidate(make_repository())

        self.assertEqual(candidate.id, str(REPO_ID))
        self.assertEqual(candidate.kind, CandidateKind.REPOSITORY)
        self.assertAlmostEqual(candidate.health_score, 0.8)
        self.assertAlmostEqual(candidate.activity_score, 0.9)
        self.assertAlmostEqual(candidate.contributor_friendliness, 0.6)
        self.assertEqual(candidate.embedding, [0.1, 0.2])

    def test_opportunity_conversion(self):
        candidate = opportunity_to_candidate(make_opportunity(), stars_count=1200)

        self.assertEqual(candidate.repository_id, str(REPO_ID))
        self.assertEqual(candidate.contribution_type, ContributionType.BUG_FIX)
        self.assertEqual(candidate.difficulty, SkillLevel.ADVANCED)
        self.assertEqual(candidate.description, '')
        self.assertEqual(candidate.estimated_hours, 6.0)
        self.assertIsNone(candidate.embedding)
        self.assertEqual(candidate.stars_count, 1200)


class TestSqlCandidateStore(unittest.TestCase):

    def setUp(self):
        self.db = MagicMock()
        self.store = SqlCandidateStore(self.db)

    def test_fetch_opportunities(self):
        self.db.execute.return_value.all.return_value = [(make_opportunity(), 50)]

        candidates = self.store.fetch_candidates(QueryHint(kind=CandidateKind.OPPORTUNITY))

        self.assertEqual(len(candidates), 1)
        self.assertEqual(candidates[0].stars_count, 50)
        self.db.execute.assert_called_once()

    def test_ann_prefilter_only_for_vector_queries(self):
        self.assertEqual(self.store._ann_limit(QueryHint(query_embedding=[1.0], limit=10)), 50)
        self.assertIsNone(self.store._ann_limit(QueryHint(query_embedding=[1.0], search_text="x", limit=10)))
        self.assertIsNone(self.store._ann_limit(QueryHint(query_embedding=[1.0])))
        self.assertIsNone(self.store._ann_limit(QueryHint(limit=10)))

    def test_fetch_repositories(self):
        self.db.execute.return_value.scalars.return_value.all.return_value = [make_repository()]
        candidates = self.store.fetch_candidates(QueryHint(kind=CandidateKind.REPOSITORY, status='active'))
        self.assertEqual([c.title for c in candidates], ['search-kit'])

    def test_fetch_repository_by_id(self):
        self.db.get.return_value = make_repository()
        candidate = self.store.fetch_by_id(str(REPO_ID), CandidateKind.REPOSITORY)
        self.assertEqual(candidate.full_name, 'acme/search-kit')
        self.db.get.assert_called_once_with(Repository, REPO_ID)

    def test_fetch_by_id_not_found(self):
        self.db.get.return_value = None
        with self.assertRaises(NotFoundError):
            self.store.fetch_by_id(str(REPO_ID), CandidateKind.REPOSITORY)

    def test_malformed_id_is_not_found(self):
        with self.assertRaises(NotFoundError):
            self.store.fetch_by_id('not-a-uuid', CandidateKind.REPOSITORY)
        with self.assertRaises(NotFoundError):
            self.store.fetch_user('not-a-uuid')
        self.db.get.assert_not_called()

    def test_fetch_user(self):
        self.db.get.return_value = User(
            id=USER_ID,
            github_username='octo',
            skill_level='beginner',
            preferred_languages=['Python'],
            interests=['testing'],
            availability_hours=5,
            experience_months=3,
        )
        self.db.execute.return_value.scalars.return_value.all.return_value = [REPO_ID]

        profile = self.store.fetch_user(str(USER_ID))

        self.assertEqual(profile.skill_level, SkillLevel.BEGINNER)
        self.assertEqual(profile.contributed_repository_ids, [str(REPO_ID)])
        self.assertEqual(profile.availability_hours, 5.0)

    def test_transient_errors_are_retried(self):
        error = OperationalError("SELECT 1", {}, Exception("connection reset"))
        result = MagicMock()
        result.all.return_value = []
        self.db.execute.side_effect = [error, result]

        self.assertEqual(self.store.fetch_opportunities_for_repository(str(REPO_ID)), [])
        self.assertEqual(self.db.execute.call_count, 2)


if __name__ == '__main__':
    unittest.main()
