"""Field recognizers and row clustering."""

from .dates import DateContext, recognize_date, recognize_strict_date
from .recognizers import FieldRecognizers
from .rows import cluster_rows, looks_like_remark, merge_multiline_remarks
from .shifts import classify_shift
from .staff import match_staff

__all__ = [
    "DateContext",
    "FieldRecognizers",
    "classify_shift",
    "cluster_rows",
    "looks_like_remark",
    "match_staff",
    "merge_multiline_remarks",
    "recognize_date",
    "recognize_strict_date",
]
