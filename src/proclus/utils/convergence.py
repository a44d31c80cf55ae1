"""
Convergence criteria for the iterative phase.

PROCLUS does not stop on a tolerance: it stops after a fixed number of
consecutive passes fail to improve the best objective seen so far.
"""

from typing import Dict, Any

from ..base.interfaces import ConvergenceCriterion


class NonImprovement(ConvergenceCriterion):
    """Convergence after `patience` consecutive non-improving iterations.

    The counter itself belongs to the iteration controller and is passed in as
    ``non_improving``; this class only decides and records.
    """

    def __init__(self, patience: int = 10):
        """
        Args:
            patience: Number of consecutive non-improving iterations to allow
        """
        super().__init__()
        if patience < 1:
            raise ValueError(f"patience must be at least 1, got {patience}")
        self.patience = patience

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if the non-improvement budget is exhausted."""
        non_improving = current_state['non_improving']
        converged = non_improving >= self.patience

        # Update history
        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'objective': current_state.get('objective'),
            'best_objective': current_state.get('best_objective'),
            'non_improving': non_improving,
            'converged': converged
        })

        return converged
