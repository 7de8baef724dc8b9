"""Pipeline orchestration: ingest -> languages -> news -> categories -> threads -> top."""

import logging
import random
import time
from collections import Counter
from dataclasses import dataclass, field, replace
from enum import IntEnum
from pathlib import Path
from typing import Any

from .analysis.categories import CategoryClassifier
from .analysis.dates import DateExtractor
from .analysis.entities import EntityRecognizer, top_entities
from .analysis.freshness import is_news
from .analysis.language import LanguageDetector
from .clustering.cluster import cluster_documents
from .clustering.ranking import rank_threads
from .config import reference_date
from .embeddings.embedder import DocumentEmbedder
from .ingest.processor import process_directory
from .models import OTHER_CATEGORY, Document, Language, RankedThread, Thread
from .resources import LanguageResources, load_resources

logger = logging.getLogger(__name__)


class Mode(IntEnum):
    """Run modes; each one runs every stage of the modes before it."""
    LANGUAGES = 1
    NEWS = 2
    CATEGORIES = 3
    THREADS = 4
    TOP = 5

    @classmethod
    def from_name(cls, name: str) -> "Mode":
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown mode: {name!r}") from None


@dataclass
class PipelineResult:
    """What a run produced, up to and including its mode."""
    mode: Mode
    documents: dict[str, Document] = field(default_factory=dict)
    languages: dict[Language, list[str]] = field(default_factory=dict)
    news: list[str] = field(default_factory=list)
    categories: dict[str, list[str]] = field(default_factory=dict)
    threads: list[Thread] = field(default_factory=list)
    ranked: list[RankedThread] = field(default_factory=list)

    def thread_title(self, thread: Thread) -> str:
        return self.documents[thread.seed].title

    def thread_category(self, thread: Thread) -> str:
        """Most common member category; ties go to the one seen first (seed first)."""
        counts = Counter(self.documents[m].category or OTHER_CATEGORY for m in thread.members)
        return counts.most_common(1)[0][0]

    def thread_entities(self, thread: Thread, n: int) -> list[str]:
        return top_entities((self.documents[m].entities for m in thread.members), n)


class Pipeline:
    """Runs the analysis stages in order over one batch of documents.

    Each stage takes the current {doc_id: Document} map and returns a new one;
    documents are replaced, never mutated.
    """

    def __init__(
        self,
        config: dict[str, Any],
        resources: dict[Language, LanguageResources] | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config
        self.today = reference_date(config)
        self.resources = resources if resources is not None else load_resources(config)
        self.embedder = DocumentEmbedder(self.resources)
        self.detector = LanguageDetector(self.resources, rng=rng)
        self.extractor = DateExtractor(self.resources, current_year=self.today.year)
        self.recognizer = EntityRecognizer(self.embedder)
        self._classifier: CategoryClassifier | None = None

    @property
    def classifier(self) -> CategoryClassifier:
        """Lazy-load the category classifier (embeds every category once)."""
        if self._classifier is None:
            self._classifier = CategoryClassifier(self.embedder)
        return self._classifier

    def run(self, mode: Mode, data_path: str | Path) -> PipelineResult:
        documents = self._timed("ingest", process_directory, Path(data_path), self.config)
        return self.run_documents(mode, documents)

    def run_documents(self, mode: Mode, documents: dict[str, Document]) -> PipelineResult:
        result = PipelineResult(mode=mode)

        documents = self._timed("languages", self.detect_languages, documents)
        result.languages = _group(documents, lambda d: d.language)
        result.documents = documents
        if mode < Mode.NEWS:
            return result

        known = {k: d for k, d in documents.items() if d.language in self.resources}
        known = self._timed("dates", self.extract_dates, known)
        news = {
            k: d for k, d in known.items()
            if is_news(d.dates, self.today, self.config["freshness_days"])
        }
        result.news = list(news)
        result.documents = news
        if mode < Mode.CATEGORIES:
            return result

        news = self._timed("categories", self.assign_categories, news)
        result.categories = _group(news, lambda d: d.category)
        result.documents = news
        if mode < Mode.THREADS:
            return result

        news, result.threads = self._timed("threads", self.build_threads, news)
        result.documents = news
        if mode < Mode.TOP:
            return result

        dates_by_doc = {k: d.dates for k, d in news.items()}
        result.ranked = self._timed("top", rank_threads, result.threads, dates_by_doc, self.today)
        return result

    def detect_languages(self, documents: dict[str, Document]) -> dict[str, Document]:
        detection = self.config["detection"]
        return {
            k: replace(d, language=self.detector.detect(
                d.tokens, detection["num_samples"], detection["min_score"]))
            for k, d in documents.items()
        }

    def extract_dates(self, documents: dict[str, Document]) -> dict[str, Document]:
        return {
            k: replace(
                d,
                dates=tuple(self.extractor.find_dates(d.tokens, d.language)),
                entities=tuple(self.recognizer.find_entities(d.tokens, d.language)),
            )
            for k, d in documents.items()
        }

    def assign_categories(self, documents: dict[str, Document]) -> dict[str, Document]:
        classifier = self.classifier
        return {
            k: replace(d, category=classifier.classify(
                self.embedder.embed(d.tokens, d.language, increment=True), d.language))
            for k, d in documents.items()
        }

    def build_threads(self, documents: dict[str, Document]) -> tuple[dict[str, Document], list[Thread]]:
        cluster_cfg = self.config["clustering"]
        clusters = cluster_documents(
            documents.values(), self.embedder, cluster_cfg["eps"], cluster_cfg["minpts"])

        threads = [Thread(seed=seed, members=members) for seed, members in clusters.items()]
        thread_of = {m: t.seed for t in threads for m in t.members}
        updated = {k: replace(d, thread_id=thread_of[k]) for k, d in documents.items()}
        return updated, threads

    def _timed(self, stage: str, func, *args):
        start = time.perf_counter()
        out = func(*args)
        logger.info(f"Stage '{stage}' done in {time.perf_counter() - start:.2f}s")
        return out


def _group(documents: dict[str, Document], key) -> dict:
    groups: dict = {}
    for doc_id, doc in documents.items():
        groups.setdefault(key(doc), []).append(doc_id)
    return groups
