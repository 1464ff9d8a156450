import pandas as pd
import pytest

from arverify.experiments.base import (
    load_data,
    build_transactional_data,
    create_verifier,
    run_verification,
    verify_rules
)
from arverify.experiments.config import DataConfig, VerifierConfig


def test_load_csv(tmp_path, basket_table):
    path = tmp_path / "baskets.csv"
    basket_table.to_csv(path, sep=';', index=False)

    table = load_data(DataConfig(path=str(path), name="baskets", sep=';'))
    assert table.shape == (8, 2)


def test_load_unsupported_format(tmp_path):
    with pytest.raises(ValueError, match="Unsupported file format"):
        load_data(DataConfig(path=str(tmp_path / "baskets.json"), name="baskets"))


def test_build_tabular():
    table = pd.DataFrame({'tid': [5, 6], 'a': ['x', 'y'], 'b': ['y', None]})
    config = VerifierConfig.tabular(['x'], ['y'], first_column_tid=True, equal_nulls=False)

    data = build_transactional_data(table, config)
    assert list(data.get_transactions()) == [5, 6]
    assert data.get_item_universe() == ['x', 'y']


def test_unknown_input_format(basket_table):
    config = VerifierConfig(rule_left=['A'], rule_right=['C'], input_format='columnar')
    with pytest.raises(ValueError, match="Input format must be one of"):
        build_transactional_data(basket_table, config)


def test_create_and_run_verifier(basket_table):
    config = VerifierConfig.singular(['A', 'B'], ['C'], min_support=0.1, min_confidence=0.5)
    verifier = create_verifier(basket_table, config)

    results, stats = run_verification(verifier)
    assert results['holds'] is False
    assert results['clusters'] == {3: [1]}
    assert stats['algorithm'] == 'ARVerifier'
    assert stats['num_transactions'] == 4
    assert stats['execution_time'] >= 0


def test_create_verifier_unknown_item(basket_table):
    config = VerifierConfig.singular(['A', 'Z'], ['C'])
    with pytest.raises(ValueError, match="not found in item universe: Z"):
        create_verifier(basket_table, config)


@pytest.mark.parametrize("n_jobs", [1, 2])
def test_verify_rules_shares_data(basket_data, n_jobs):
    rules = [(['A', 'B'], ['C']), (['A'], ['B']), (['B', 'C'], ['A'])]
    results = verify_rules(basket_data, rules, n_jobs=n_jobs, jaccard_threshold=0.0)

    assert [r['antecedent'] for r in results] == [['A', 'B'], ['A'], ['B', 'C']]
    assert results[0]['clusters'] == {3: [1], 0: [2, 3, 4]}
    # {A} matches T3 exactly, none of them equals {B}
    assert results[1]['clusters'][3] == [3]
    assert all('execution_time' in r for r in results)


def test_config_to_dict():
    config = VerifierConfig.singular(['A'], ['B'], min_support=0.2)
    as_dict = config.to_dict()
    assert as_dict['input_format'] == 'singular'
    assert as_dict['min_support'] == 0.2
    assert as_dict['jaccard_threshold'] is None


def test_verify_rules_rejects_misspelled_option(basket_data):
    with pytest.raises(TypeError):
        verify_rules(basket_data, [(['A'], ['C'])], min_suport=0.9)
