from .transactional import (
    Transaction,
    TransactionalData,
    create_from_singular,
    create_from_tabular,
    NULL_ITEM
)

__all__ = [
    'Transaction',
    'TransactionalData',
    'create_from_singular',
    'create_from_tabular',
    'NULL_ITEM'
]
