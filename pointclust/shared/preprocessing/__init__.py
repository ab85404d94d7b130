"""Feature extraction for text documents"""

from .config import BagOfWordsConfig
from .bag_of_words import WordFrequencyVectorizer, word_frequencies

__all__ = [
    "BagOfWordsConfig",
    "WordFrequencyVectorizer",
    "word_frequencies",
]
