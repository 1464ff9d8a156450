"""
Support and hash helpers for tid-lists.

A tid-list is the set of transaction ids covering an itemset. It comes in two
forms produced by different construction paths:

- SimpleTIdList: flat sequence of ids (naive enumeration)
- PartitionTIdList: ids grouped into equivalence classes (partitioned construction)

Both forms answer the same two questions through support() and tid_hash().
"""
from dataclasses import dataclass, field
from typing import Iterable, Tuple, Union

import numpy as np

_MASK = 0xFFFFFFFF


@dataclass(frozen=True)
class SimpleTIdList:
    tids: Tuple[int, ...] = ()


@dataclass(frozen=True)
class PartitionTIdList:
    groups: Tuple[Tuple[int, ...], ...] = ()
    size: int = field(init=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'size', sum(len(group) for group in self.groups))

    @property
    def sets_number(self) -> int:
        return len(self.groups)


TIdList = Union[SimpleTIdList, PartitionTIdList]


def _mix(tids: Iterable[int]) -> np.ndarray:
    # murmur3 finalizer on every id, uint32 wraparound
    x = np.fromiter(tids, dtype=np.int64).astype(np.uint32)
    with np.errstate(over='ignore'):
        x ^= x >> np.uint32(16)
        x *= np.uint32(0x85EBCA6B)
        x ^= x >> np.uint32(13)
        x *= np.uint32(0xC2B2AE35)
        x ^= x >> np.uint32(16)
    return x


def _combine(mixed: np.ndarray, count: int) -> int:
    # Summation keeps the result independent of id and group order
    total = int(mixed.sum(dtype=np.uint64)) & _MASK
    return (total ^ (count * 0x9E3779B9)) & _MASK


def support(tids: TIdList) -> int:
    """Number of transaction ids represented by the tid-list."""
    if isinstance(tids, SimpleTIdList):
        return len(tids.tids)
    if isinstance(tids, PartitionTIdList):
        return tids.size
    raise TypeError(f"Unsupported tid-list type: {type(tids).__name__}")


def tid_hash(tids: TIdList) -> int:
    """
    Order-independent unsigned 32-bit hash of the represented id set.

    A flat and a partitioned tid-list over the same ids hash identically.
    """
    if isinstance(tids, SimpleTIdList):
        return _combine(_mix(tids.tids), len(tids.tids))
    if isinstance(tids, PartitionTIdList):
        mixed = _mix(tid for group in tids.groups for tid in group)
        return _combine(mixed, tids.size)
    raise TypeError(f"Unsupported tid-list type: {type(tids).__name__}")


def to_simple(tids: TIdList) -> SimpleTIdList:
    """Flatten a tid-list, keeping group order then in-group order."""
    if isinstance(tids, SimpleTIdList):
        return tids
    if isinstance(tids, PartitionTIdList):
        return SimpleTIdList(tuple(tid for group in tids.groups for tid in group))
    raise TypeError(f"Unsupported tid-list type: {type(tids).__name__}")
