"""
Association rule verification over transactional data.
"""
from arverify.data.transactional import TransactionalData, create_from_singular, create_from_tabular
from arverify.verification.ar_verifier import ARVerifier
from arverify.verification.stats_calculator import ARStatsCalculator

__version__ = "0.1.0"

__all__ = [
    'TransactionalData',
    'create_from_singular',
    'create_from_tabular',
    'ARVerifier',
    'ARStatsCalculator'
]
