"""Ordered first-match-wins dispatch over line classifiers"""

from typing import Callable, Optional

from lunor.core.classify.base import Classification, SourceLine
from lunor.core.classify.lines import classify_comment, classify_component, classify_declaration, classify_directive
from lunor.core.classify.markdown import classify_markdown


Classifier = Callable[[SourceLine], Optional[Classification]]

# Priority order; the first classifier that claims a line wins
CLASSIFIERS: tuple[Classifier, ...] = (
    classify_comment,
    classify_declaration,
    classify_directive,
    classify_component,
    classify_markdown,
)


def classify(line: SourceLine, classifiers: tuple[Classifier, ...] = CLASSIFIERS) -> Optional[Classification]:
    """Return the first non-None classification for line, else None."""
    for classifier in classifiers:
        result = classifier(line)
        if result is not None:
            return result
    return None
