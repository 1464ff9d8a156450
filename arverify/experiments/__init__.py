from .config import (
    DataConfig,
    VerifierConfig,
    INPUT_FORMATS
)
from .base import (
    load_data,
    build_transactional_data,
    create_verifier,
    run_verification,
    verify_rules
)

__all__ = [
    'DataConfig',
    'VerifierConfig',
    'INPUT_FORMATS',
    'load_data',
    'build_transactional_data',
    'create_verifier',
    'run_verification',
    'verify_rules'
]
