from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

INPUT_FORMATS = ['singular', 'tabular']


@dataclass
class DataConfig:
    path: str
    name: str
    sep: str = ","


@dataclass
class VerifierConfig:
    rule_left: List[str] = field(default_factory=list)
    rule_right: List[str] = field(default_factory=list)
    input_format: str = 'singular'  # 'singular', 'tabular'

    # singular layout: one row per (tid, item)
    tid_column_index: int = 0
    item_column_index: int = 1
    # tabular layout: one row per transaction
    first_column_tid: bool = False

    min_support: float = 0.0
    min_confidence: float = 0.0
    equal_nulls: bool = True
    # None derives (|left| - 1) / |left|
    jaccard_threshold: Optional[float] = None
    show_progress: bool = False

    @classmethod
    def singular(cls, rule_left: List[str], rule_right: List[str], **kwargs) -> 'VerifierConfig':
        return cls(rule_left=rule_left, rule_right=rule_right, input_format='singular', **kwargs)

    @classmethod
    def tabular(cls, rule_left: List[str], rule_right: List[str], **kwargs) -> 'VerifierConfig':
        return cls(rule_left=rule_left, rule_right=rule_right, input_format='tabular', **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rule_left': self.rule_left,
            'rule_right': self.rule_right,
            'input_format': self.input_format,
            'tid_column_index': self.tid_column_index,
            'item_column_index': self.item_column_index,
            'first_column_tid': self.first_column_tid,
            'min_support': self.min_support,
            'min_confidence': self.min_confidence,
            'equal_nulls': self.equal_nulls,
            'jaccard_threshold': self.jaccard_threshold,
            'show_progress': self.show_progress
        }
