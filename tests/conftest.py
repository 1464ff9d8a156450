import pandas as pd
import pytest

from arverify.data.transactional import Transaction, TransactionalData, create_from_singular


@pytest.fixture
def basket_table():
    # T1={A,B}, T2={A,B,C}, T3={A}, T4={B,C}
    return pd.DataFrame({
        'tid': [1, 1, 2, 2, 2, 3, 4, 4],
        'item': ['A', 'B', 'A', 'B', 'C', 'A', 'B', 'C']
    })


@pytest.fixture
def basket_data(basket_table):
    return create_from_singular(basket_table, tid_column_index=0, item_column_index=1)


@pytest.fixture
def mixed_data():
    # item ids: 0=A, 1=B, 2=C, 3=D
    transactions = {
        10: Transaction(10, (0, 1)),
        11: Transaction(11, (0, 1, 2)),
        12: Transaction(12, (0,)),
        13: Transaction(13, (1, 2)),
        14: Transaction(14, (2,)),
        15: Transaction(15, (0, 1, 3)),
        16: Transaction(16, (3,)),
        17: Transaction(17, ()),
        18: Transaction(18, (0, 0, 1)),
        19: Transaction(19, (2, 2)),
    }
    return TransactionalData(transactions, ['A', 'B', 'C', 'D'])
