"""
Download Classifier
===================
Phân loại một request path theo platform của binary.

Thứ tự ưu tiên (first match wins):
    1. Linux   /cockroach-*.linux-*.tgz
    2. Darwin  /cockroach-*.darwin-*.tgz
    3. Source  /cockroach-*.src.tgz
    4. Windows /cockroach-*.windows-*.tgz|zip

Windows đứng cuối vì đã từng có thời gian dùng nhầm .tgz cho Windows,
nên pattern Windows match rộng hơn và có thể trùng với các pattern trước.
Thứ tự này là một phần của contract, không được đổi.
"""

import re
from enum import Enum
from typing import List, Optional, Pattern, Sequence, Tuple


class Category(Enum):
    """Platform của một lượt tải."""
    UNKNOWN = "unknown"
    LINUX = "linux"
    DARWIN = "darwin"
    WINDOWS = "windows"
    SOURCE = "source"

    @property
    def title(self) -> str:
        return self.value.capitalize()


# Thứ tự hiển thị trong report
DISPLAY_CATEGORIES = [Category.LINUX, Category.DARWIN, Category.WINDOWS, Category.SOURCE]

ClassificationRule = Tuple[Pattern, Category]

CLASSIFICATION_RULES: List[ClassificationRule] = [
    (re.compile(r'/cockroach-.*\.linux-.*\.tgz'), Category.LINUX),
    (re.compile(r'/cockroach-.*\.darwin-.*\.tgz'), Category.DARWIN),
    (re.compile(r'/cockroach-.*\.src\.tgz'), Category.SOURCE),
    # Windows từng bị release nhầm dưới dạng tgz
    (re.compile(r'/cockroach-.*\.windows-.*\.(tgz|zip)'), Category.WINDOWS),
]


class Classifier:
    """
    Áp dụng một danh sách (pattern, category) có thứ tự lên request path.

    Usage:
        >>> Classifier().classify('/cockroach-v1.0.linux-amd64.tgz')
        <Category.LINUX: 'linux'>
    """

    def __init__(self, rules: Optional[Sequence[ClassificationRule]] = None):
        self.rules = list(CLASSIFICATION_RULES if rules is None else rules)

    def classify(self, request_path: str) -> Category:
        for pattern, category in self.rules:
            if pattern.search(request_path):
                return category
        return Category.UNKNOWN


_default_classifier = Classifier()


def classify(request_path: str) -> Category:
    """Phân loại path với CLASSIFICATION_RULES mặc định."""
    return _default_classifier.classify(request_path)
