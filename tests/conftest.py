import random

import pytest

from newsthreads.embeddings.embedder import DocumentEmbedder
from newsthreads.models import Document, Language
from newsthreads.resources import (
    BUILTIN_DAY_NAMES,
    BUILTIN_FREQUENCY_VOCAB,
    BUILTIN_MONTH_NAMES,
    LanguageResources,
)

EN_CLUSTERS = {
    "election": 0, "vote": 0, "president": 0, "joe_biden": 0,
    "football": 1, "goal": 1, "match": 1,
    "market": 2, "stocks": 2, "bank": 2,
}


@pytest.fixture
def resources():
    """Small English + Russian resources; Russian has no embedding table."""
    return {
        Language.ENGLISH: LanguageResources(
            language=Language.ENGLISH,
            frequency_vocab=BUILTIN_FREQUENCY_VOCAB[Language.ENGLISH],
            day_names=BUILTIN_DAY_NAMES[Language.ENGLISH],
            month_names=BUILTIN_MONTH_NAMES[Language.ENGLISH],
            date_masks=["MDY", "YMD", "DMY", "YDM", "MDX", "XMD", "DMX", "XDM"],
            term_clusters=dict(EN_CLUSTERS),
            num_clusters=3,
            lemmas={"elections": "election", "votes": "vote"},
            categories=[
                ["politics", "election", "vote", "president"],
                ["sports", "football", "goal", "match"],
                ["economy", "market", "stocks", "bank"],
            ],
            default_category_threshold=0.1,
        ),
        Language.RUSSIAN: LanguageResources(
            language=Language.RUSSIAN,
            frequency_vocab=BUILTIN_FREQUENCY_VOCAB[Language.RUSSIAN],
            day_names=BUILTIN_DAY_NAMES[Language.RUSSIAN],
            month_names=BUILTIN_MONTH_NAMES[Language.RUSSIAN],
            date_masks=["DMY", "YMD", "YDM", "DMX", "XDM"],
            lemma_suffix="_NOUN",
        ),
    }


@pytest.fixture
def embedder(resources):
    return DocumentEmbedder(resources)


@pytest.fixture
def rng():
    return random.Random(42)


def make_doc(doc_id, text, title="", language=Language.ENGLISH, **kwargs):
    return Document(doc_id=doc_id, tokens=tuple(text.split()), title=title, language=language, **kwargs)
