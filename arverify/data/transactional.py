"""
Transactional data model.

Transactions are multisets of item ids; item ids index into a shared item
universe of names. Data can be built from pandas tables in two layouts:

- singular: one row per (transaction id, item) pair
- tabular: one row per transaction, every non-null cell is an item
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple, Any, Optional, Sequence

import pandas as pd
from mlxtend.preprocessing import TransactionEncoder

from arverify.tidlist.tidlist_util import SimpleTIdList

logger = logging.getLogger(__name__)

# Item name shared by all null cells when nulls compare equal; suffixed with
# underscores if the data already holds an item with that name
NULL_ITEM = "NULL"

_NULL = object()


@dataclass(frozen=True)
class Transaction:
    tid: int
    items: Tuple[int, ...]

    def get_items_ids(self) -> Tuple[int, ...]:
        return self.items


class TransactionalData:
    """
    Read-only set of transactions over an indexed item universe.

    Transactions keep the order in which they were first seen in the source
    table. Instances are never mutated after construction, so one instance can
    be shared by several verifiers.
    """

    def __init__(
            self,
            transactions: Dict[int, Transaction],
            item_universe: List[str],
            null_item: Optional[str] = None
    ):
        self._transactions = transactions
        self._item_universe = item_universe
        self._null_item = null_item
        self._item_index = {name: idx for idx, name in enumerate(item_universe)}
        self._one_hot = None

    def get_transactions(self) -> Dict[int, Transaction]:
        return self._transactions

    def get_item_universe(self) -> List[str]:
        return self._item_universe

    def get_num_transactions(self) -> int:
        return len(self._transactions)

    def get_null_item(self) -> Optional[str]:
        """Name of the item standing for null cells, None if nulls were dropped or absent."""
        return self._null_item

    def get_item_id(self, name: str) -> int:
        """Exact lookup of an item name; raises KeyError if it is not in the universe."""
        return self._item_index[name]

    def get_item_names(self, item_ids: Sequence[int]) -> List[str]:
        return [self._item_universe[i] for i in item_ids]

    def to_one_hot(self) -> pd.DataFrame:
        """
        One-hot encode the transactions with mlxtend's TransactionEncoder.

        Returns:
            Boolean DataFrame indexed by transaction id, one column per item name
        """
        if self._one_hot is None:
            named = [self.get_item_names(t.items) for t in self._transactions.values()]
            te = TransactionEncoder()
            te_array = te.fit(named).transform(named)
            self._one_hot = pd.DataFrame(
                te_array,
                columns=te.columns_,
                index=list(self._transactions.keys())
            )
        return self._one_hot

    def cover(self, item_ids: Sequence[int]) -> SimpleTIdList:
        """Flat tid-list of the transactions containing every given item."""
        one_hot = self.to_one_hot()
        if not item_ids:
            return SimpleTIdList(tuple(int(tid) for tid in one_hot.index))
        mask = one_hot[self.get_item_names(item_ids)].all(axis=1)
        return SimpleTIdList(tuple(int(tid) for tid in one_hot.index[mask]))

    def __len__(self):
        return len(self._transactions)

    def __repr__(self):
        return (f"TransactionalData(num_transactions={self.get_num_transactions()}, "
                f"num_items={len(self._item_universe)})")


def _item_name(value: Any, equal_nulls: bool) -> Optional[object]:
    if pd.isna(value) or (isinstance(value, str) and value == ''):
        return _NULL if equal_nulls else None
    # Integer columns turn into floats once they hold a null
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _to_tid(value: Any) -> int:
    try:
        tid = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Transaction id must be an integer, got '{value}'")
    if tid != value and str(tid) != str(value).strip():
        raise ValueError(f"Transaction id must be an integer, got '{value}'")
    return tid


def _null_item_name(named_transactions: Dict[int, List[object]]) -> str:
    real_names = {name for names in named_transactions.values() for name in names if name is not _NULL}
    name = NULL_ITEM
    while name in real_names:
        name += '_'
    if name != NULL_ITEM:
        logger.warning("Item '%s' occurs in the data, null cells are named '%s'", NULL_ITEM, name)
    return name


def _build(named_transactions: Dict[int, List[object]]) -> TransactionalData:
    null_item = None
    if any(name is _NULL for names in named_transactions.values() for name in names):
        null_item = _null_item_name(named_transactions)
        named_transactions = {
            tid: [null_item if name is _NULL else name for name in names]
            for tid, names in named_transactions.items()
        }

    # TransactionEncoder sorts the unique items; that order defines the item ids
    te = TransactionEncoder()
    te.fit(list(named_transactions.values()))
    item_universe = [str(item) for item in te.columns_]
    index = {name: idx for idx, name in enumerate(item_universe)}

    transactions = {
        tid: Transaction(tid, tuple(index[name] for name in names))
        for tid, names in named_transactions.items()
    }
    data = TransactionalData(transactions, item_universe, null_item=null_item)
    logger.debug("Built %r", data)
    return data


def create_from_singular(
    table: pd.DataFrame,
    tid_column_index: int = 0,
    item_column_index: int = 1,
    equal_nulls: bool = True
) -> TransactionalData:
    """
    Build transactional data from a table with one row per (tid, item) pair.

    Args:
        table: Input table
        tid_column_index: Index of the column holding transaction ids
        item_column_index: Index of the column holding item values
        equal_nulls: If True, null items are kept as one shared item, otherwise dropped

    Returns:
        TransactionalData with transactions in order of first appearance
    """
    n_cols = table.shape[1]
    for name, idx in [('tid_column_index', tid_column_index), ('item_column_index', item_column_index)]:
        if not 0 <= idx < n_cols:
            raise ValueError(f"{name} must be in [0, {n_cols}), got {idx}")

    named: Dict[int, List[object]] = {}
    tid_values = table.iloc[:, tid_column_index]
    item_values = table.iloc[:, item_column_index]
    for tid_value, item_value in zip(tid_values, item_values):
        if pd.isna(tid_value):
            continue
        items = named.setdefault(_to_tid(tid_value), [])
        name = _item_name(item_value, equal_nulls)
        if name is not None:
            items.append(name)

    return _build(named)


def create_from_tabular(
    table: pd.DataFrame,
    first_column_tid: bool = False,
    equal_nulls: bool = True
) -> TransactionalData:
    """
    Build transactional data from a table with one row per transaction.

    Args:
        table: Input table
        first_column_tid: If True, the first column holds the transaction id,
                          otherwise the row position is used
        equal_nulls: If True, null cells are kept as one shared item, otherwise dropped

    Returns:
        TransactionalData with transactions in row order
    """
    named: Dict[int, List[object]] = {}
    for position, row in enumerate(table.itertuples(index=False, name=None)):
        if first_column_tid:
            if not row or pd.isna(row[0]):
                continue
            tid, cells = _to_tid(row[0]), row[1:]
        else:
            tid, cells = position, row

        items = named.setdefault(tid, [])
        for value in cells:
            name = _item_name(value, equal_nulls)
            if name is not None:
                items.append(name)

    return _build(named)
