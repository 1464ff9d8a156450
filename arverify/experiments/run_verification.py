"""
Rule Verification Experiment: Market Basket

Checks a fixed list of rules against a singular-layout basket table
(one row per transaction id / item pair) and prints how each rule is violated.
"""
import logging

from arverify.experiments.base import load_data, build_transactional_data, verify_rules
from arverify.experiments.config import DataConfig, VerifierConfig
from arverify.postprocessing.clusters import summarize_clusters

logging.basicConfig(level=logging.INFO)

# =============================================================================
# CONFIGURATION
# =============================================================================

DATA_CONFIG = DataConfig(path="../../data/raw/baskets.csv", name="baskets")

# Rules to verify (LHS, RHS) as item names
RULES = [
    (['bread', 'butter'], ['milk']),
    (['beer'], ['chips']),
    (['eggs', 'flour'], ['sugar'])
]

VERIFIER_CONFIG = VerifierConfig(
    input_format='singular',
    tid_column_index=0,
    item_column_index=1,
    min_support=0.05,
    min_confidence=0.6
)

N_JOBS = -1


# =============================================================================
# EXPERIMENT
# =============================================================================

def run_experiment():
    print("=" * 70)
    print("RULE VERIFICATION EXPERIMENT")
    print("=" * 70)

    print("\n[1] Loading data...")
    table = load_data(DATA_CONFIG)
    print(f"  Shape: {table.shape}")

    data = build_transactional_data(table, VERIFIER_CONFIG)
    print(f"  Transactions: {data.get_num_transactions()}")
    print(f"  Items: {len(data.get_item_universe())}")

    print(f"\n[2] Verifying {len(RULES)} rules...")
    results = verify_rules(
        data,
        RULES,
        n_jobs=N_JOBS,
        min_support=VERIFIER_CONFIG.min_support,
        min_confidence=VERIFIER_CONFIG.min_confidence,
        jaccard_threshold=VERIFIER_CONFIG.jaccard_threshold
    )

    print(f"\n{'=' * 70}")
    print("RESULTS")
    print("=" * 70)
    for result in results:
        verdict = "HOLDS" if result['holds'] else "VIOLATED"
        print(f"\n  {result['antecedent']} -> {result['consequent']}: {verdict}")
        print(f"    support={result['support']:.4f}  confidence={result['confidence']:.4f}")
        print(f"    violating transactions: {result['num_transactions_violating']}")

        rows, _ = summarize_clusters(result['clusters'])
        for row in rows:
            print(f"    priority {row['priority']} ({row['label']}): {row['num_transactions']} transactions")

    holding = sum(1 for r in results if r['holds'])
    print(f"\nRules holding: {holding}/{len(results)}")
    print("=" * 70)


if __name__ == '__main__':
    run_experiment()
