"""Frequency-sampling language detection."""

import random
from typing import Sequence

from ..models import Language
from ..resources import LanguageResources


class LanguageDetector:
    """Scores a random sample of a document's tokens against each language's
    high-frequency vocabulary.

    Sampling keeps detection cheap on long documents; the score is an unbiased
    estimate, so repeated runs on the same input may disagree near the
    threshold. Pass a seeded ``rng`` for reproducible results.
    """

    def __init__(self, resources: dict[Language, LanguageResources], rng: random.Random | None = None):
        self.vocabs = [(lang, res.frequency_vocab) for lang, res in resources.items()]
        self.rng = rng or random.Random()

    def sample(self, tokens: Sequence[str], num_samples: int) -> list[str]:
        indexes = list(range(len(tokens)))
        self.rng.shuffle(indexes)
        return [tokens[i] for i in indexes[:num_samples]]

    def scores(self, tokens: Sequence[str], num_samples: int) -> dict[Language, float]:
        """Fraction of sampled tokens found in each language's vocabulary."""
        samples = [t.lower() for t in self.sample(tokens, num_samples)]
        if not samples:
            return {lang: 0.0 for lang, _ in self.vocabs}
        return {
            lang: sum(1 for s in samples if s in vocab) / len(samples)
            for lang, vocab in self.vocabs
        }

    def detect(self, tokens: Sequence[str], num_samples: int = 300, min_score: float = 0.1) -> Language:
        """Best-scoring language, or UNKNOWN if no score exceeds min_score."""
        best_lang, best_score = Language.UNKNOWN, 0.0
        for lang, score in self.scores(tokens, num_samples).items():
            if score > best_score:
                best_lang, best_score = lang, score
        if best_score > min_score:
            return best_lang
        return Language.UNKNOWN
