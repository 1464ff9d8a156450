from typing import Dict, List, Tuple, Any, Optional

import pandas as pd

PRIORITY_LABELS = {
    5: 'exact',
    3: 'lhs_only',
    2: 'rhs_only',
    0: 'partial'
}


def clusters_to_frame(
    clusters: Dict[int, List[int]],
    coefficients: Optional[Dict[int, Tuple[float, float]]] = None
) -> pd.DataFrame:
    """
    Flatten a cluster map into one row per transaction.

    Args:
        clusters: Priority -> transaction ids, as returned by get_clusters_violating_ar()
        coefficients: Optional transaction id -> (jaccard_left, jaccard_right)

    Returns:
        DataFrame with columns priority, label, transaction_id and, when
        coefficients are given, jaccard_left and jaccard_right. Rows are
        ordered by descending priority, bucket order is kept.
    """
    columns = ['priority', 'label', 'transaction_id']
    if coefficients is not None:
        columns += ['jaccard_left', 'jaccard_right']

    rows = []
    for priority in sorted(clusters, reverse=True):
        for tid in clusters[priority]:
            row = {
                'priority': priority,
                'label': PRIORITY_LABELS.get(priority, 'unknown'),
                'transaction_id': tid
            }
            if coefficients is not None:
                row['jaccard_left'], row['jaccard_right'] = coefficients[tid]
            rows.append(row)

    return pd.DataFrame(rows, columns=columns)


def filter_clusters(
    clusters: Dict[int, List[int]],
    min_priority: int = 0,
    max_priority: int = 5
) -> Dict[int, List[int]]:
    """Keep only buckets whose priority is within [min_priority, max_priority]."""
    return {
        priority: list(tids) for priority, tids in clusters.items()
        if min_priority <= priority <= max_priority
    }


def summarize_clusters(clusters: Dict[int, List[int]]) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
    """
    Per-priority counts of a cluster map.

    Returns:
        Tuple of (rows, stats) where:
            rows: One dict per bucket with priority, label and num_transactions
            stats: Dictionary with num_clusters and num_transactions
    """
    rows = [
        {
            'priority': priority,
            'label': PRIORITY_LABELS.get(priority, 'unknown'),
            'num_transactions': len(clusters[priority])
        }
        for priority in sorted(clusters, reverse=True)
    ]

    stats = {
        'num_clusters': len(rows),
        'num_transactions': sum(r['num_transactions'] for r in rows),
    }
    return rows, stats
