"""
Association Rule Verification Module

Checks a given rule against transactional data:
- Weighted Jaccard similarity of transactions to each rule side
- Support and confidence derived from exact matches
- Priority clusters of transactions that deviate from the rule
"""
from .ar import ArIDs
from .base import Algorithm
from .stats_calculator import ARStatsCalculator
from .ar_verifier import ARVerifier

__all__ = ['ArIDs', 'Algorithm', 'ARStatsCalculator', 'ARVerifier']
