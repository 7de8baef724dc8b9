"""Nearest-category assignment by embedding distance."""

import logging

import numpy as np

from ..embeddings.distance import cosine_distance
from ..embeddings.embedder import DocumentEmbedder
from ..models import OTHER_CATEGORY, Language

logger = logging.getLogger(__name__)


class CategoryClassifier:
    """Assigns each document the category whose embedding is closest.

    Category definitions are embedded once, up front. A winner whose
    similarity falls below its per-language threshold becomes "other".
    """

    def __init__(self, embedder: DocumentEmbedder):
        self.embedder = embedder
        self.categories: dict[Language, list[tuple[str, np.ndarray]]] = {}
        for lang, res in embedder.resources.items():
            if not res.has_embeddings or not res.categories:
                continue
            self.categories[lang] = [
                (tokens[0], embedder.embed(tokens, lang, increment=True))
                for tokens in res.categories if tokens
            ]
            logger.debug(f"Embedded {len(self.categories[lang])} categories for '{lang.code}'")

    def names(self, language: Language) -> list[str]:
        return [name for name, _ in self.categories.get(language, [])]

    def classify(self, doc_embedding: np.ndarray, language: Language) -> str:
        categories = self.categories.get(language)
        if not categories or doc_embedding.size == 0:
            return OTHER_CATEGORY

        best_name, best_distance = None, None
        for name, embedding in categories:
            distance = cosine_distance(doc_embedding, embedding)
            if best_distance is None or distance < best_distance:
                best_name, best_distance = name, distance

        similarity = 1.0 - best_distance
        if similarity < self.embedder.resources[language].category_threshold(best_name):
            return OTHER_CATEGORY
        return best_name
