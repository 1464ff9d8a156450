from .tidlist_util import SimpleTIdList, PartitionTIdList, support, tid_hash, to_simple

__all__ = ['SimpleTIdList', 'PartitionTIdList', 'support', 'tid_hash', 'to_simple']
