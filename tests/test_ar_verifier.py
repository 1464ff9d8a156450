import pandas as pd
import pytest

from arverify.data.transactional import TransactionalData, create_from_singular, create_from_tabular
from arverify.verification.ar_verifier import ARVerifier


@pytest.fixture
def empty_rule_data():
    # transactions {A, B}, {}, {A}
    table = pd.DataFrame([['A', 'B'], [None, None], ['A', None]])
    return create_from_tabular(table, equal_nulls=False)


def test_resolves_item_names(basket_data):
    verifier = ARVerifier(basket_data, ['A', 'B'], ['C'])
    rule = verifier.get_rule()
    assert rule.left == (0, 1)
    assert rule.right == (2,)


@pytest.mark.parametrize("left, right, side, name", [
    (['A', 'X'], ['C'], 'left', 'X'),
    (['A'], ['c'], 'right', 'c'),
])
def test_unknown_item_fails_at_construction(basket_data, left, right, side, name):
    with pytest.raises(ValueError, match=f"Item in {side} rule part not found in item universe: {name}"):
        ARVerifier(basket_data, left, right)


def test_overlapping_rule_parts_rejected(basket_data):
    with pytest.raises(ValueError, match="disjoint"):
        ARVerifier(basket_data, ['A', 'B'], ['B'])


def test_empty_dataset_rejected():
    with pytest.raises(ValueError, match="empty dataset"):
        ARVerifier(TransactionalData({}, []), [], [])


@pytest.mark.parametrize("kwargs", [{'min_support': -0.1}, {'min_confidence': 1.5}])
def test_thresholds_out_of_range(basket_data, kwargs):
    with pytest.raises(ValueError, match="must be in"):
        ARVerifier(basket_data, ['A'], ['C'], **kwargs)


def test_execute_returns_elapsed_ms(basket_data):
    verifier = ARVerifier(basket_data, ['A', 'B'], ['C'])
    elapsed = verifier.execute()
    assert isinstance(elapsed, int)
    assert elapsed >= 0


def test_basket_example_metrics(basket_data):
    verifier = ARVerifier(basket_data, ['A', 'B'], ['C'], min_support=0.1, min_confidence=0.5)
    verifier.execute()

    assert verifier.get_real_support() == 0.0
    assert verifier.get_real_confidence() == 0.0
    assert verifier.get_clusters_violating_ar() == {3: [1]}
    assert verifier.get_num_clusters_violating_ar() == 1
    assert verifier.get_num_transactions_violating_ar() == 1
    assert not verifier.ar_holds()


def test_holds_with_zero_minimums(basket_data):
    verifier = ARVerifier(basket_data, ['A', 'B'], ['C'])
    verifier.execute()
    assert verifier.ar_holds()


@pytest.mark.parametrize("min_support, min_confidence, holds", [
    (0.3, 0.9, True),
    (1 / 3, 1.0, True),
    (0.5, 0.2, False),
    (0.2, 1.0, True),
    (0.1, 0.0, True),
])
def test_holds_compares_support_and_confidence(empty_rule_data, min_support, min_confidence, holds):
    # support = 1/3, confidence = 1.0
    verifier = ARVerifier(empty_rule_data, [], [], min_support=min_support, min_confidence=min_confidence)
    verifier.execute()

    assert verifier.get_real_support() == pytest.approx(1 / 3)
    assert verifier.get_real_confidence() == 1.0
    assert verifier.ar_holds() is holds


def test_execute_twice_gives_same_results(basket_data):
    verifier = ARVerifier(basket_data, ['A', 'B'], ['C'], jaccard_threshold=0.0)
    verifier.execute()
    first = verifier.get_results()
    verifier.execute()
    assert verifier.get_results() == first


def test_reset_state(basket_data):
    verifier = ARVerifier(basket_data, ['A', 'B'], ['C'], jaccard_threshold=0.0)
    verifier.execute()
    verifier.reset_state()

    assert verifier.get_clusters_violating_ar() == {}
    assert verifier.get_num_clusters_violating_ar() == 0
    assert verifier.get_num_transactions_violating_ar() == 0
    assert verifier.get_real_support() == 0.0
    assert verifier.get_real_confidence() == 0.0


def test_shared_data_is_not_modified(basket_data):
    before = dict(basket_data.get_transactions())
    for left, right in [(['A'], ['B']), (['B', 'C'], ['A'])]:
        ARVerifier(basket_data, left, right).execute()
    assert basket_data.get_transactions() == before


def test_get_results(basket_data):
    verifier = ARVerifier(basket_data, ['A', 'B'], ['C'], min_support=0.1)
    verifier.execute()
    results = verifier.get_results()

    assert results['antecedent'] == ['A', 'B']
    assert results['consequent'] == ['C']
    assert results['holds'] is False
    assert results['num_transactions_violating'] == 1
    assert results['clusters'] == {3: [1]}


def test_numeric_item_names_resolve_with_nulls():
    table = pd.DataFrame({'tid': [1, 1, 2, 2], 'item': [1, 2, 1, float('nan')]})
    data = create_from_singular(table, equal_nulls=False)

    verifier = ARVerifier(data, ['1'], ['2'])
    assert verifier.get_rule().left == (data.get_item_id('1'),)


def test_unknown_keyword_rejected(basket_data):
    with pytest.raises(TypeError):
        ARVerifier(basket_data, ['A'], ['C'], min_suport=0.9)


def test_holds_requires_execute(basket_data):
    verifier = ARVerifier(basket_data, ['A', 'B'], ['C'])
    with pytest.raises(RuntimeError, match="execute"):
        verifier.ar_holds()

    verifier.execute()
    assert verifier.ar_holds()

    verifier.reset_state()
    with pytest.raises(RuntimeError, match="execute"):
        verifier.ar_holds()
