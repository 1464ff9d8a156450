import logging
from pathlib import Path
from typing import List, Dict, Any, Tuple, Sequence

import pandas as pd
from joblib import Parallel, delayed

from arverify.data.transactional import TransactionalData, create_from_singular, create_from_tabular
from arverify.verification.ar_verifier import ARVerifier

from .config import DataConfig, VerifierConfig, INPUT_FORMATS

logger = logging.getLogger(__name__)


def load_data(config: DataConfig) -> pd.DataFrame:
    path = Path(config.path)
    if path.suffix == '.csv':
        return pd.read_csv(path, sep=config.sep)
    elif path.suffix in ['.xlsx', '.xls']:
        return pd.read_excel(path)
    elif path.suffix == '.parquet':
        return pd.read_parquet(path)
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}")


def build_transactional_data(table: pd.DataFrame, config: VerifierConfig) -> TransactionalData:
    input_format = config.input_format.lower()

    if input_format == 'singular':
        data = create_from_singular(
            table,
            tid_column_index=config.tid_column_index,
            item_column_index=config.item_column_index,
            equal_nulls=config.equal_nulls
        )
    elif input_format == 'tabular':
        data = create_from_tabular(
            table,
            first_column_tid=config.first_column_tid,
            equal_nulls=config.equal_nulls
        )
    else:
        raise ValueError(f"Input format must be one of {INPUT_FORMATS}, got '{config.input_format}'")

    logger.info("Loaded %d transactions over %d items (%s layout)",
                data.get_num_transactions(), len(data.get_item_universe()), input_format)
    return data


def create_verifier(table: pd.DataFrame, config: VerifierConfig) -> ARVerifier:
    data = build_transactional_data(table, config)
    return ARVerifier(
        data,
        rule_left=config.rule_left,
        rule_right=config.rule_right,
        min_support=config.min_support,
        min_confidence=config.min_confidence,
        jaccard_threshold=config.jaccard_threshold,
        show_progress=config.show_progress
    )


def run_verification(verifier: ARVerifier) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Execute a verifier.

    Returns:
        Tuple of (results, stats) where:
            results: Verdict and metrics from ARVerifier.get_results()
            stats: Dict with execution_time (seconds), algorithm and mode
    """
    elapsed_ms = verifier.execute()
    results = verifier.get_results()
    stats = {
        'execution_time': elapsed_ms / 1000.0,
        'num_transactions': verifier.data.get_num_transactions(),
        'algorithm': 'ARVerifier',
        'mode': 'verification'
    }
    return results, stats


def verify_rules(
    data: TransactionalData,
    rules: Sequence[Tuple[Sequence[str], Sequence[str]]],
    n_jobs: int = 1,
    **kwargs
) -> List[Dict[str, Any]]:
    """
    Verify several rules against one shared dataset.

    Each job builds its own verifier; the data is only read, so the jobs run
    on threads.

    Args:
        data: Transactional data shared by all verifiers
        rules: (rule_left, rule_right) pairs of item names
        n_jobs: Number of parallel jobs (-1 uses all cores)
        **kwargs: Passed on to ARVerifier (min_support, min_confidence, ...)

    Returns:
        One result dict per rule, in input order, with execution_time added
    """
    def verify_one(rule_left, rule_right):
        verifier = ARVerifier(data, rule_left, rule_right, **kwargs)
        results, stats = run_verification(verifier)
        results['execution_time'] = stats['execution_time']
        return results

    return Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(verify_one)(left, right) for left, right in rules
    )
