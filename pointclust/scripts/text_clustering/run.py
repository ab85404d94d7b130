#!/usr/bin/env python3
"""
Text Clustering Demo

Clusters short documents by their word counts. Features come from
WordFrequencyVectorizer; the clustering itself is scikit-learn's K-Means with
K-Means++ seeding.

Usage:
    python -m pointclust.scripts.text_clustering.run [--documents docs.txt] [--n-clusters 2] [--verbose]

The documents file holds one document per line. Without it a small built-in
corpus is used.
"""

import logging
import sys
import traceback
from typing import Dict, List, Optional, Sequence

import click
import numpy as np
from sklearn.cluster import KMeans

from pointclust.shared.preprocessing import BagOfWordsConfig, WordFrequencyVectorizer

DEFAULT_DOCUMENTS = [
    "The quick brown fox jumps over the lazy dog",
    "A quick brown dog outfoxes a lazy fox",
    "The lazy dog sleeps in the sun",
    "The sun shines brightly in the sky",
    "The quick rabbit jumps over the fence",
]


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the script."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")


def load_documents(path: Optional[str]) -> List[str]:
    if path is None:
        return list(DEFAULT_DOCUMENTS)
    with open(path, "r") as f:
        documents = [line.strip() for line in f if line.strip()]
    if not documents:
        raise ValueError(f"No documents found in {path}")
    return documents


def cluster_documents(
    documents: Sequence[str], n_clusters: int, random_state: int = 42, max_iter: int = 1000
) -> Dict[int, List[str]]:
    """
    Group documents by K-Means over their word count vectors

    Args:
        documents: Documents to cluster
        n_clusters: Number of clusters
        random_state: Seed for K-Means++ seeding
        max_iter: Iteration cap for each K-Means run

    Returns:
        Mapping of cluster index to the documents in it, in input order
    """
    if not 1 <= n_clusters <= len(documents):
        raise ValueError(f"n_clusters must be between 1 and {len(documents)}, got {n_clusters}")

    vectors = WordFrequencyVectorizer(BagOfWordsConfig()).fit_transform(documents)
    logging.debug(f"Feature matrix shape: {vectors.shape}")

    model = KMeans(n_clusters=n_clusters, init="k-means++", max_iter=max_iter, n_init=10, random_state=random_state)
    labels = model.fit_predict(vectors)

    clusters: Dict[int, List[str]] = {i: [] for i in range(n_clusters)}
    for document, label in zip(documents, np.asarray(labels)):
        clusters[int(label)].append(document)
    return clusters


@click.command()
@click.option(
    "--documents",
    "-d",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    default=None,
    help="Text file with one document per line",
)
@click.option("--n-clusters", "-k", type=int, default=2, show_default=True, help="Number of clusters")
@click.option("--random-state", type=int, default=42, show_default=True, help="Random seed")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def main(documents: Optional[str], n_clusters: int, random_state: int, verbose: bool):
    """Cluster documents by word frequencies and print each cluster."""
    setup_logging(verbose)

    try:
        docs = load_documents(documents)
        clusters = cluster_documents(docs, n_clusters, random_state)
        for index, members in clusters.items():
            logging.info(f"Cluster {index + 1}:")
            for document in members:
                logging.info(f"  - {document}")

    except Exception as e:
        logging.error(f"Text clustering failed: {e}")
        if verbose:
            logging.error(f"Traceback: {traceback.format_exc()}")
        sys.exit(1)


if __name__ == "__main__":
    main()
