"""Bag-of-clusters document embeddings."""

from typing import Iterable

import numpy as np

from ..models import Language
from ..resources import LanguageResources


class Lemmatizer:
    """Maps lowercase words to the lemma keys used by the embedding table.

    Words missing from the lemma table are tagged with the language's default
    suffix and treated as their own lemma.
    """

    def __init__(self, lemmas: dict[str, str], default_suffix: str = ""):
        self.lemmas = lemmas
        self.default_suffix = default_suffix

    def lemma(self, word: str) -> str | None:
        """Lemma of a lowercase word, or None when the table doesn't know it."""
        return self.lemmas.get(word)

    def tag(self, word: str) -> str:
        lemma = self.lemmas.get(word)
        if lemma is None:
            return word + self.default_suffix
        return lemma


class DocumentEmbedder:
    """Turns token sequences into fixed-width cluster histograms."""

    def __init__(self, resources: dict[Language, LanguageResources]):
        self.resources = resources
        self._lemmatizers = {
            lang: Lemmatizer(res.lemmas, res.lemma_suffix)
            for lang, res in resources.items()
        }

    def dimension(self, language: Language) -> int:
        res = self.resources.get(language)
        return res.num_clusters if res is not None and res.has_embeddings else 0

    def lemmatizer(self, language: Language) -> Lemmatizer:
        return self._lemmatizers.get(language) or Lemmatizer({})

    def embed(self, tokens: Iterable[str], language: Language, increment: bool = True) -> np.ndarray:
        """Histogram of term clusters over the tokens.

        With increment=False each bin is clamped to 1 (presence only), which
        suits short strings such as titles. Unknown tokens are dropped.
        """
        result = np.zeros(self.dimension(language), dtype=np.int64)
        if result.size == 0:
            return result

        table = self.resources[language].term_clusters
        lemmatizer = self.lemmatizer(language)
        for token in tokens:
            cluster_id = table.get(lemmatizer.tag(token.lower()))
            if cluster_id is None:
                continue
            if increment:
                result[cluster_id] += 1
            else:
                result[cluster_id] = 1
        return result

    def is_known(self, word: str, language: Language) -> bool:
        """Whether the word (after lemmatization) has a cluster in the language's table."""
        res = self.resources.get(language)
        if res is None or not res.has_embeddings:
            return False
        return self.lemmatizer(language).tag(word.lower()) in res.term_clusters
