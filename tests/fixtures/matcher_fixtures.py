"""Shared user and opportunity fixtures for matcher tests."""

from core.ranking.models import Candidate, ContributionType, SkillLevel, UserProfile


def make_user(**overrides) -> UserProfile:
    values = dict(
        id='550e8400-e29b-41d4-a716-446655440000',
        skill_level=SkillLevel.INTERMEDIATE,
        preferred_languages=['TypeScript', 'Python', 'React'],
        interests=['web development', 'ai', 'testing'],
        availability_hours=10,
        experience_months=18,
    )
    values.update(overrides)
    return UserProfile(**values)


def make_opportunities():
    return [
        Candidate(
            id='550e8400-e29b-41d4-a716-446655440001',
            title='Fix TypeScript type errors in React components',
            description='Several React components have TypeScript type errors that need fixing',
            contribution_type=ContributionType.BUG_FIX,
            difficulty=SkillLevel.INTERMEDIATE,
            required_skills=['TypeScript', 'React', 'debugging'],
            technologies=['TypeScript', 'React', 'Jest'],
            estimated_hours=8,
            help_wanted=True,
            priority=1,
        ),
        Candidate(
            id='550e8400-e29b-41d4-a716-446655440002',
            title='Add AI-powered search feature',
            description='Implement machine learning based search with embeddings',
            contribution_type=ContributionType.FEATURE,
            difficulty=SkillLevel.ADVANCED,
            required_skills=['AI/ML', 'Python', 'vector search'],
            technologies=['Python', 'TensorFlow', 'PostgreSQL'],
            estimated_hours=25,
            mentorship_available=True,
            priority=2,
        ),
        Candidate(
            id='550e8400-e29b-41d4-a716-446655440003',
            title='Write unit tests for auth module',
            description='Add comprehensive unit tests for authentication functionality',
            contribution_type=ContributionType.TESTING,
            difficulty=SkillLevel.BEGINNER,
            required_skills=['testing', 'JavaScript'],
            technologies=['JavaScript', 'Jest', 'Node.js'],
            estimated_hours=6,
            good_first_issue=True,
            help_wanted=True,
            mentorship_available=True,
            priority=3,
        ),
        Candidate(
            id='550e8400-e29b-41d4-a716-446655440004',
            title='Implement advanced GraphQL subscriptions',
            description='Build real-time GraphQL subscription system',
            contribution_type=ContributionType.FEATURE,
            difficulty=SkillLevel.EXPERT,
            required_skills=['GraphQL', 'WebSockets', 'Node.js'],
            technologies=['GraphQL', 'Apollo', 'Node.js'],
            estimated_hours=40,
            priority=4,
        ),
    ]
