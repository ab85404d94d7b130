import logging
import re
from collections import Counter
from typing import Dict, List, Optional, Sequence

import numpy as np

from pointclust.shared.preprocessing.config import BagOfWordsConfig

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def word_frequencies(document: str, lowercase: bool = True) -> Dict[str, int]:
    """Count whitespace-separated tokens of a document"""
    text = document.lower() if lowercase else document
    return dict(Counter(token for token in _WHITESPACE.split(text.strip()) if token))


class WordFrequencyVectorizer:
    """Turns documents into word count vectors over a shared vocabulary"""

    def __init__(self, config: Optional[BagOfWordsConfig] = None):
        self._config = config or BagOfWordsConfig()
        if self._config.min_document_frequency < 1:
            raise ValueError("min_document_frequency must be >= 1")
        self.vocabulary_: List[str] = []

    def fit(self, documents: Sequence[str]) -> "WordFrequencyVectorizer":
        """Build the sorted vocabulary from the documents"""
        document_counts: Counter = Counter()
        for document in documents:
            document_counts.update(word_frequencies(document, self._config.lowercase).keys())

        self.vocabulary_ = sorted(
            word for word, count in document_counts.items() if count >= self._config.min_document_frequency
        )
        logger.debug(f"Vocabulary of {len(self.vocabulary_)} words from {len(documents)} documents")
        return self

    def transform(self, documents: Sequence[str]) -> np.ndarray:
        """
        Count vocabulary words per document

        Returns:
            Matrix of shape (n_documents, n_vocabulary)
        """
        if not self.vocabulary_:
            raise ValueError("Vectorizer must be fitted before transform")

        index = {word: i for i, word in enumerate(self.vocabulary_)}
        vectors = np.zeros((len(documents), len(self.vocabulary_)), dtype=float)
        for row, document in enumerate(documents):
            for word, count in word_frequencies(document, self._config.lowercase).items():
                if word in index:
                    vectors[row, index[word]] = count
        return vectors

    def fit_transform(self, documents: Sequence[str]) -> np.ndarray:
        return self.fit(documents).transform(documents)
