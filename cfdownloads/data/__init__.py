"""
Data Module
===========
Chứa các công cụ để đọc, parse và phân loại CloudFront log files.

Classes:
- LogSourceWalker: Liệt kê và giải nén các file *.gz
- CloudFrontLogParser: Parse một dòng log thành ParsedRequest
- RequestFilter: Lọc request không phải lượt tải binary
- Classifier: Phân loại path theo platform
"""

from .classifier import CLASSIFICATION_RULES, Category, Classifier, classify
from .parser import CloudFrontLogParser, ParsedRequest, RequestFilter, SkipReason
from .walker import LogSourceWalker

__all__ = [
    'CLASSIFICATION_RULES',
    'Category',
    'Classifier',
    'classify',
    'CloudFrontLogParser',
    'ParsedRequest',
    'RequestFilter',
    'SkipReason',
    'LogSourceWalker',
]
