from pydantic.dataclasses import dataclass


@dataclass(frozen=True)
class BagOfWordsConfig:
    """Configuration for word frequency feature extraction"""

    lowercase: bool = True
    min_document_frequency: int = 1
