"""DBSCAN clustering of documents into news threads."""

import logging
from typing import Iterable

import numpy as np

from ..embeddings.distance import DistanceMatrix, cosine_distance
from ..embeddings.embedder import DocumentEmbedder
from ..ingest.tokenizer import tokenize
from ..models import Document, Language

logger = logging.getLogger(__name__)


def cluster_documents(
    documents: Iterable[Document],
    embedder: DocumentEmbedder,
    eps: float,
    minpts: int,
) -> dict[str, list[str]]:
    """Group documents into threads.

    Documents are only compared with documents of the same language. Returns
    {seed_id: [seed_id, member_id, ...]}; noise documents are their own
    single-member threads.
    """
    groups: dict[Language, list[Document]] = {}
    for doc in sorted(documents, key=lambda d: d.doc_id):
        groups.setdefault(doc.language, []).append(doc)

    threads: dict[str, list[str]] = {}
    for language in sorted(groups):
        docs = groups[language]
        if embedder.dimension(language) == 0:
            logger.debug(f"No embeddings for '{language.code}', {len(docs)} singleton thread(s)")
            threads.update({d.doc_id: [d.doc_id] for d in docs})
            continue

        embeddings = [embedder.embed(d.tokens, language, increment=True) for d in docs]
        for seed, members in dbscan(DistanceMatrix(embeddings), eps, minpts):
            if len(members) == 1:
                threads[docs[seed].doc_id] = [docs[seed].doc_id]
                continue
            ordered = order_members(docs[seed], [docs[m] for m in members], embedder)
            threads[docs[seed].doc_id] = [d.doc_id for d in ordered]

        logger.debug(f"Clustered {len(docs)} '{language.code}' document(s)")
    return threads


def dbscan(distances: DistanceMatrix, eps: float, minpts: int) -> list[tuple[int, list[int]]]:
    """Run DBSCAN over a precomputed distance matrix.

    Two documents are neighbours when their distance is strictly below eps.
    A core point has at least ``minpts`` other documents in its neighbourhood.
    Returns (seed_index, member_indexes) per cluster, seed being the first
    core point found, followed by each noise point as its own cluster.
    """
    from sklearn.cluster import DBSCAN

    n = len(distances)
    if n == 0:
        return []
    if eps <= 0 or n == 1:
        return [(i, [i]) for i in range(n)]

    # sklearn's neighbourhood is inclusive and counts the point itself
    model = DBSCAN(
        eps=float(np.nextafter(eps, 0)),
        min_samples=minpts + 1,
        metric="precomputed",
    )
    labels = model.fit_predict(distances.matrix)
    core = set(int(i) for i in model.core_sample_indices_)

    clusters: dict[int, list[int]] = {}
    noise = []
    for idx, label in enumerate(labels):
        if label == -1:
            noise.append(idx)
            continue
        clusters.setdefault(int(label), []).append(idx)

    results = []
    for label in sorted(clusters):
        members = clusters[label]
        seed = min(i for i in members if i in core)
        results.append((seed, members))
    results.extend((i, [i]) for i in noise)
    return results


def order_members(seed: Document, members: list[Document], embedder: DocumentEmbedder) -> list[Document]:
    """Seed first, then members by title similarity to the seed (ties by document id)."""
    language = seed.language
    seed_title = embedder.embed(tokenize(seed.title), language, increment=False)

    def key(doc: Document) -> tuple[float, str]:
        title = embedder.embed(tokenize(doc.title), language, increment=False)
        return cosine_distance(seed_title, title), doc.doc_id

    others = sorted((d for d in members if d.doc_id != seed.doc_id), key=key)
    return [seed] + others
