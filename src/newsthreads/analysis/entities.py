"""Named-entity candidates: runs of capitalised words known to the embedding vocabulary."""

from collections import Counter
from typing import Iterable, Sequence

from ..embeddings.embedder import DocumentEmbedder
from ..models import Language

ENTITY_JOINERS = {
    Language.ENGLISH: "_",
    Language.RUSSIAN: "::",
}


class EntityRecognizer:
    """Joins runs of two or more capitalised tokens and keeps the known phrases."""

    def __init__(self, embedder: DocumentEmbedder):
        self.embedder = embedder

    def find_entities(self, tokens: Sequence[str], language: Language) -> list[str]:
        joiner = ENTITY_JOINERS.get(language, "_")
        entities = []
        for run in self._capitalised_runs(tokens):
            phrase = joiner.join(word.lower() for word in run)
            if self.embedder.is_known(phrase, language):
                entities.append(phrase)
        return entities

    @staticmethod
    def _capitalised_runs(tokens: Sequence[str]) -> list[list[str]]:
        runs, current = [], []
        for token in tokens:
            if token != token.lower():
                current.append(token)
                continue
            if len(current) > 1:
                runs.append(current)
            current = []
        if len(current) > 1:
            runs.append(current)
        return runs


def top_entities(entity_lists: Iterable[Sequence[str]], n: int) -> list[str]:
    """Most common entities across documents; ties keep first-seen order."""
    counts = Counter()
    for entities in entity_lists:
        counts.update(entities)
    return [entity for entity, _ in counts.most_common(n)]
