"""
Association rule verification over transactional data.
"""
import logging
from typing import Dict, List, Any, Optional, Sequence, Tuple

from arverify.data.transactional import TransactionalData
from arverify.verification.ar import ArIDs
from arverify.verification.base import Algorithm
from arverify.verification.stats_calculator import ARStatsCalculator

logger = logging.getLogger(__name__)


class ARVerifier(Algorithm):
    """
    Checks whether a rule given by item names holds over transactional data.

    Item names are resolved against the data's item universe at construction,
    so a misspelled item fails before any pass over the data. When the rule
    does not hold exactly, the relevant transactions are grouped into
    priority clusters:

    - 5: both sides matched exactly
    - 3: only the left side matched exactly
    - 2: only the right side matched exactly
    - 0: neither side matched exactly
    """

    def __init__(
            self,
            data: TransactionalData,
            rule_left: Sequence[str],
            rule_right: Sequence[str],
            min_support: float = 0.0,
            min_confidence: float = 0.0,
            jaccard_threshold: Optional[float] = None,
            show_progress: bool = False
    ):
        """
        Initialize the verifier.

        Args:
            data: Transactional data, shared and never modified
            rule_left: Item names of the antecedent
            rule_right: Item names of the consequent
            min_support: Support the rule needs to hold
            min_confidence: Confidence the rule needs to hold
            jaccard_threshold: Relevance threshold passed to ARStatsCalculator
            show_progress: Whether to show a progress bar
        """
        for name, value in [('min_support', min_support), ('min_confidence', min_confidence)]:
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if data.get_num_transactions() == 0:
            raise ValueError("Got an empty dataset: AR verifying is meaningless.")

        self.data = data
        self.min_support = min_support
        self.min_confidence = min_confidence

        left_ids = self._resolve_items(rule_left, 'left')
        right_ids = self._resolve_items(rule_right, 'right')
        shared = set(left_ids) & set(right_ids)
        if shared:
            raise ValueError(
                f"Rule parts must be disjoint, shared items: {data.get_item_names(sorted(shared))}"
            )

        if not left_ids or not right_ids:
            logger.warning("Rule %s -> %s has an empty side; only empty transactions can match it",
                           list(rule_left), list(rule_right))

        self.rule_left = list(rule_left)
        self.rule_right = list(rule_right)
        self.stats_calculator = ARStatsCalculator(
            data,
            ArIDs(left_ids, right_ids),
            jaccard_threshold=jaccard_threshold,
            show_progress=show_progress
        )
        logger.info("Verifying %s -> %s over %d transactions",
                    self.rule_left, self.rule_right, data.get_num_transactions())

    def _resolve_items(self, names: Sequence[str], side: str) -> Tuple[int, ...]:
        ids = []
        for name in names:
            try:
                ids.append(self.data.get_item_id(name))
            except KeyError:
                raise ValueError(f"Item in {side} rule part not found in item universe: {name}") from None
        return tuple(ids)

    def _execute_internal(self) -> None:
        self.stats_calculator.calculate_statistics()
        logger.info("Rule %s -> %s: support=%.4f confidence=%.4f holds=%s",
                    self.rule_left, self.rule_right,
                    self.get_real_support(), self.get_real_confidence(), self.ar_holds())

    def reset_state(self) -> None:
        self.stats_calculator.reset_state()

    def ar_holds(self) -> bool:
        """
        Returns True if real support and confidence reach the required minimums.

        Raises:
            RuntimeError: if the verifier has not been executed since the last reset
        """
        if not self.stats_calculator.is_calculated():
            raise RuntimeError("Rule not verified yet. Call execute() first.")
        return (self.stats_calculator.get_support() >= self.min_support and
                self.stats_calculator.get_confidence() >= self.min_confidence)

    def get_rule(self) -> ArIDs:
        return self.stats_calculator.rule

    def get_num_clusters_violating_ar(self) -> int:
        return self.stats_calculator.get_num_clusters_violating_ar()

    def get_num_transactions_violating_ar(self) -> int:
        return self.stats_calculator.get_num_transactions_violating_ar()

    def get_clusters_violating_ar(self) -> Dict[int, List[int]]:
        return self.stats_calculator.get_clusters_violating_ar()

    def get_real_support(self) -> float:
        return self.stats_calculator.get_support()

    def get_real_confidence(self) -> float:
        return self.stats_calculator.get_confidence()

    def get_results(self) -> Dict[str, Any]:
        """Verdict and metrics of the last run as a flat dict."""
        return {
            'antecedent': self.rule_left,
            'consequent': self.rule_right,
            'holds': self.ar_holds(),
            'support': self.get_real_support(),
            'confidence': self.get_real_confidence(),
            'min_support': self.min_support,
            'min_confidence': self.min_confidence,
            'num_transactions_violating': self.get_num_transactions_violating_ar(),
            'num_clusters_violating': self.get_num_clusters_violating_ar(),
            'clusters': {p: list(tids) for p, tids in self.get_clusters_violating_ar().items()}
        }

    def __repr__(self):
        return (f"ARVerifier(rule_left={self.rule_left}, rule_right={self.rule_right}, "
                f"min_support={self.min_support}, min_confidence={self.min_confidence})")
