from .base import Base
from .repository import Repository
from .opportunity import Opportunity
from .user import User, Contribution

__all__ = [
    'Base',
    'Repository',
    'Opportunity',
    'User',
    'Contribution',
]
