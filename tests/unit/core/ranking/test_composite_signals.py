#!/usr/bin/env python3
"""
Unit tests for CompositeSignalScorer: trending and repository health.
"""

import math
import unittest
from datetime import datetime, timedelta, timezone

from core.config_loader import TrendingConfig
from core.exceptions import ConfigurationError, InvalidLimit, InvalidWeightConfiguration
from core.ranking.models import Candidate, CandidateKind
from core.ranking.signals import CompositeSignalScorer

NOW = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)


def opportunity(opp_id, hours_ago, views=0, applications=0, stars=0, **kwargs):
    return Candidate(
        id=opp_id,
        title=opp_id,
        created_at=NOW - timedelta(hours=hours_ago),
        view_count=views,
        application_count=applications,
        stars_count=stars,
        **kwargs
    )


class TestTrending(unittest.TestCase):

    def setUp(self):
        self.scorer = CompositeSignalScorer()

    def test_engagement_weights_applications(self):
        candidate = opportunity("a", 1, views=10, applications=2)
        self.assertEqual(self.scorer.engagement(candidate), 16.0)

    def test_engagement_score_saturates(self):
        candidate = opportunity("a", 1, views=50)
        self.assertAlmostEqual(self.scorer.engagement_score(candidate), 1.0 - math.exp(-1.0))

    def test_recency_decays_linearly(self):
        self.assertAlmostEqual(CompositeSignalScorer.recency_score(NOW - timedelta(hours=84), NOW, 168), 0.5)
        self.assertEqual(CompositeSignalScorer.recency_score(NOW, NOW, 168), 1.0)

    def test_quality_score_caps_at_one(self):
        self.assertEqual(CompositeSignalScorer.quality_score(0), 0.0)
        self.assertAlmostEqual(CompositeSignalScorer.quality_score(1000), 0.6)
        self.assertEqual(CompositeSignalScorer.quality_score(10 ** 7), 1.0)

    def test_window_excludes_old_candidates(self):
        candidates = [
            opportunity("fresh", 2, views=5),
            opportunity("stale", 200, views=500),
        ]
        results = self.scorer.trending(candidates, window_hours=168, now=NOW)
        self.assertEqual([r.candidate_id for r in results], ["fresh"])

    def test_min_engagement_filter(self):
        candidates = [
            opportunity("quiet", 2),
            opportunity("busy", 2, views=3),
        ]
        results = self.scorer.trending(candidates, min_engagement=1, now=NOW)
        self.assertEqual([r.candidate_id for r in results], ["busy"])

    def test_zero_min_engagement_keeps_everything_in_window(self):
        results = self.scorer.trending([opportunity("quiet", 2)], min_engagement=0, now=NOW)
        self.assertEqual(len(results), 1)

    def test_more_engagement_ranks_higher(self):
        candidates = [
            opportunity("low", 10, views=2),
            opportunity("high", 10, views=20, applications=5),
        ]
        results = self.scorer.trending(candidates, now=NOW)
        self.assertEqual(results[0].candidate_id, "high")
        self.assertIn("5 contributor(s) applied recently", results[0].match_reasons)

    def test_equal_scores_keep_corpus_order(self):
        a = opportunity("a", 5, views=5)
        b = opportunity("b", 5, views=5)
        results = self.scorer.trending([a, b], now=NOW)
        self.assertEqual([r.candidate_id for r in results], ["a", "b"])

    def test_newly_posted_reason(self):
        results = self.scorer.trending([opportunity("new", 1, views=1)], now=NOW)
        self.assertIn('Newly posted', results[0].match_reasons)

    def test_limit_applied(self):
        candidates = [opportunity(f"c{i}", i + 1, views=i + 1) for i in range(5)]
        self.assertEqual(len(self.scorer.trending(candidates, limit=2, now=NOW)), 2)

    def test_invalid_arguments(self):
        with self.assertRaises(ConfigurationError):
            self.scorer.trending([], window_hours=0, now=NOW)
        with self.assertRaises(ConfigurationError):
            self.scorer.trending([], min_engagement=-1, now=NOW)
        with self.assertRaises(InvalidLimit):
            self.scorer.trending([], limit=0, now=NOW)

    def test_blend_must_sum_to_one(self):
        with self.assertRaises(InvalidWeightConfiguration):
            CompositeSignalScorer(TrendingConfig(engagement_blend=0.5, recency_blend=0.5, quality_blend=0.5))

    def test_scores_bounded(self):
        candidates = [opportunity(f"c{i}", i, views=i * 100, applications=i * 10, stars=10 ** i) for i in range(6)]
        for result in self.scorer.trending(candidates, min_engagement=0, now=NOW):
            self.assertGreaterEqual(result.total_score, 0.0)
            self.assertLessEqual(result.total_score, 1.0)


class TestHealth(unittest.TestCase):

    def setUp(self):
        self.scorer = CompositeSignalScorer()
        self.repository = Candidate(
            id="repo-1",
            kind=CandidateKind.REPOSITORY,
            activity_score=0.9,
            community_score=0.8,
            documentation_score=0.3,
            contributor_friendliness=0.6,
        )

    def test_health_score_is_mean_of_sub_scores(self):
        self.assertAlmostEqual(self.scorer.health_score(self.repository), (0.9 + 0.8 + 0.3 + 0.6) / 4)

    def test_health_status_bands(self):
        self.assertEqual(CompositeSignalScorer.health_status(0.85), 'excellent')
        self.assertEqual(CompositeSignalScorer.health_status(0.6), 'good')
        self.assertEqual(CompositeSignalScorer.health_status(0.45), 'fair')
        self.assertEqual(CompositeSignalScorer.health_status(0.1), 'needs_improvement')

    def test_health_snapshot(self):
        start = NOW - timedelta(hours=30)
        opportunities = [
            Candidate(id="o1", status='open'),
            Candidate(id="o2", status='completed', started_at=start, completed_at=start + timedelta(hours=10)),
            Candidate(id="o3", status='completed', started_at=start, completed_at=start + timedelta(hours=20)),
        ]

        snapshot = self.scorer.health(self.repository, opportunities)

        self.assertEqual(snapshot.entity_id, "repo-1")
        self.assertEqual(snapshot.health_status, 'good')
        self.assertEqual(snapshot.total_opportunities, 3)
        self.assertEqual(snapshot.open_opportunities, 1)
        self.assertAlmostEqual(snapshot.avg_completion_hours, 15.0)
        self.assertEqual(snapshot.key_strengths, ['active_development', 'strong_community'])
        self.assertEqual(snapshot.key_weaknesses, ['improve_docs'])

    def test_health_without_opportunities(self):
        snapshot = self.scorer.health(self.repository, [])
        self.assertEqual(snapshot.total_opportunities, 0)
        self.assertIsNone(snapshot.avg_completion_hours)


if __name__ == '__main__':
    unittest.main()
