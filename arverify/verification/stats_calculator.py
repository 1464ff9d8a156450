"""
Rule statistics: similarity of every transaction to both rule sides, support
and confidence derived from it, and priority clusters of relevant transactions.
"""
import math
import logging
from collections import Counter
from typing import Dict, List, Tuple, Optional, Sequence

from tqdm.auto import tqdm

from arverify.data.transactional import TransactionalData
from arverify.verification.ar import ArIDs

logger = logging.getLogger(__name__)

# Priority of transactions that match both sides exactly
EXACT_PRIORITY = 5


class ARStatsCalculator:
    """
    Computes how well a transactional dataset agrees with an association rule.

    The data is shared and only read. Every result lives in this instance and
    is cleared by reset_state().
    """

    def __init__(
            self,
            data: TransactionalData,
            rule: ArIDs,
            jaccard_threshold: Optional[float] = None,
            show_progress: bool = False
    ):
        """
        Args:
            data: Transactional data to check the rule against
            rule: Rule over item ids of data
            jaccard_threshold: Similarity a transaction must exceed to be kept;
                               None derives (|left| - 1) / |left| from the rule
            show_progress: Whether to show a progress bar over transactions
        """
        if jaccard_threshold is not None and not 0.0 <= jaccard_threshold <= 1.0:
            raise ValueError(f"jaccard_threshold must be in [0, 1], got {jaccard_threshold}")

        self.data = data
        self.rule = rule
        self.show_progress = show_progress
        self._jaccard_threshold = (
            jaccard_threshold if jaccard_threshold is not None
            else self.default_threshold(rule)
        )
        self.reset_state()

    @staticmethod
    def default_threshold(rule: ArIDs) -> float:
        n_left = len(rule.left)
        if n_left == 0:
            return 0.0
        return (n_left - 1) / n_left

    @staticmethod
    def jaccard_similarity(transaction_items: Sequence[int], rule_part: Sequence[int]) -> float:
        """
        Weighted Jaccard similarity of two item multisets.

        Intersection and union take the per-item minimum and maximum count, so
        the result is symmetric and equals 1.0 only for equal multisets (or two
        empty ones).
        """
        count_transaction = Counter(transaction_items)
        count_rule = Counter(rule_part)

        intersection_count = sum((count_transaction & count_rule).values())
        union_count = sum((count_transaction | count_rule).values())

        if union_count == 0:
            return 1.0
        return intersection_count / union_count

    @staticmethod
    def calculate_cluster_priority(jaccard: Tuple[float, float]) -> int:
        return 3 * math.floor(jaccard[0]) + 2 * math.floor(jaccard[1])

    def _is_relevant(self, jaccard_left: float, jaccard_right: float) -> bool:
        threshold = self._jaccard_threshold
        return jaccard_left > threshold and (jaccard_right > threshold or jaccard_right == 0.0)

    def calculate_statistics(self) -> None:
        """
        Run similarity, support, confidence and clustering over the bound data.

        Raises:
            RuntimeError: if statistics were already calculated and not reset
        """
        if self._calculated:
            raise RuntimeError("Statistics already calculated. Call reset_state() first.")

        transactions = self.data.get_transactions()
        num_transactions = len(transactions)

        items_iter = transactions.items()
        if self.show_progress:
            items_iter = tqdm(items_iter, desc="Calculating Jaccard coefficients",
                              unit="transaction", total=num_transactions)

        num_exact = 0
        num_lhs_exact = 0
        for tid, transaction in items_iter:
            items = transaction.get_items_ids()
            jaccard_left = self.jaccard_similarity(items, self.rule.left)
            jaccard_right = self.jaccard_similarity(items, self.rule.right)

            if jaccard_left == 1.0:
                num_lhs_exact += 1
                if jaccard_right == 1.0:
                    num_exact += 1

            if self._is_relevant(jaccard_left, jaccard_right):
                self._jaccard_coefficients[tid] = (jaccard_left, jaccard_right)

        if num_transactions:
            self._support = num_exact / num_transactions
            self._lhs_support = num_lhs_exact / num_transactions
        self.rule.confidence = self._support / self._lhs_support if self._lhs_support != 0.0 else 0.0

        for tid, coef in self._jaccard_coefficients.items():
            priority = self.calculate_cluster_priority(coef)
            self._clusters_violating_ar.setdefault(priority, []).append(tid)
            if priority != EXACT_PRIORITY:
                self._num_transactions_violating_ar += 1

        self._calculated = True
        logger.debug(
            "support=%.4f lhs_support=%.4f confidence=%.4f relevant=%d violating=%d",
            self._support, self._lhs_support, self.rule.confidence,
            len(self._jaccard_coefficients), self._num_transactions_violating_ar
        )

    def reset_state(self) -> None:
        self._jaccard_coefficients: Dict[int, Tuple[float, float]] = {}
        self._support = 0.0
        self._lhs_support = 0.0
        self.rule.confidence = 0.0
        self._clusters_violating_ar: Dict[int, List[int]] = {}
        self._num_transactions_violating_ar = 0
        self._calculated = False

    def is_calculated(self) -> bool:
        return self._calculated

    def get_num_clusters_violating_ar(self) -> int:
        return len(self._clusters_violating_ar)

    def get_num_transactions_violating_ar(self) -> int:
        """Number of relevant transactions that do not match both rule sides exactly."""
        return self._num_transactions_violating_ar

    def get_clusters_violating_ar(self) -> Dict[int, List[int]]:
        """Relevant transaction ids grouped by cluster priority (5, 3, 2 or 0)."""
        return self._clusters_violating_ar

    def get_jaccard_coefficients(self) -> Dict[int, Tuple[float, float]]:
        return self._jaccard_coefficients

    def get_jaccard_threshold(self) -> float:
        return self._jaccard_threshold

    def get_support(self) -> float:
        return self._support

    def get_lhs_support(self) -> float:
        return self._lhs_support

    def get_confidence(self) -> float:
        return self.rule.confidence

    def __repr__(self):
        return (f"ARStatsCalculator(left={self.rule.left}, right={self.rule.right}, "
                f"jaccard_threshold={self._jaccard_threshold})")
