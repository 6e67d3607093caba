"""
Base OutcomeSource class for deciding match results.
"""
from abc import ABC, abstractmethod


class OutcomeSource(ABC):
    """
    Abstract base class for match outcome sources.

    An outcome source only sees the two competitors' skills, never their
    ratings. All sources must implement decide().
    """

    @abstractmethod
    def decide(self, skill_a: int, skill_b: int) -> bool:
        """
        Play a single trial between two competitors.

        Args:
            skill_a: Skill of competitor A
            skill_b: Skill of competitor B

        Returns:
            True if A wins, False if B wins
        """
        pass

    def __call__(self, skill_a: int, skill_b: int) -> bool:
        return self.decide(skill_a, skill_b)
