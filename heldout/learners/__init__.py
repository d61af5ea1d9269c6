"""
Concrete Learner implementations.

Organizational namespace only; the run talks to them exclusively
through heldout.core.interfaces.Learner.
"""

from .majority import MajorityClassLearner
from .sgd import SGDClassifierLearner

__all__ = ["MajorityClassLearner", "SGDClassifierLearner"]
