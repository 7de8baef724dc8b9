"""Per-language resources: vocabularies, date tables, embeddings and categories.

Every file format here is plain UTF-8 text:

- frequency vocabulary: one token per line
- day / month names: one token per line, tagged by cycling through 1..31 / 1..12
- embedding table: ``vocab_size num_clusters`` header, then ``term cluster_id`` lines
- lemma table: ``word lemma`` per line
- categories: one category per line, whitespace separated, first token is the name

A file that cannot be read is reported and replaced by the built-in default
where one exists; otherwise the resource is left empty and the stages that need
it are skipped for that language.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, TypeVar

from .errors import ResourceError
from .models import Language

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DAY_NUMBERS = {str(d): d for d in range(1, 32)} | {f"{d:02d}": d for d in range(1, 10)}

BUILTIN_DAY_NAMES: dict[Language, dict[str, int]] = {
    Language.ENGLISH: _DAY_NUMBERS | {
        f"{d}{'th' if 11 <= d <= 13 else {1: 'st', 2: 'nd', 3: 'rd'}.get(d % 10, 'th')}": d
        for d in range(1, 32)
    },
    Language.RUSSIAN: dict(_DAY_NUMBERS),
}

_EN_MONTHS = ["january", "february", "march", "april", "may", "june", "july",
              "august", "september", "october", "november", "december"]
_RU_MONTHS = ["январь", "февраль", "март", "апрель", "май", "июнь", "июль",
              "август", "сентябрь", "октябрь", "ноябрь", "декабрь"]
_RU_MONTHS_GENITIVE = ["января", "февраля", "марта", "апреля", "мая", "июня", "июля",
                       "августа", "сентября", "октября", "ноября", "декабря"]

BUILTIN_MONTH_NAMES: dict[Language, dict[str, int]] = {
    Language.ENGLISH: {name: i for i, name in enumerate(_EN_MONTHS, 1)}
    | {name[:3]: i for i, name in enumerate(_EN_MONTHS, 1)}
    | {"sept": 9},
    Language.RUSSIAN: {name: i for i, name in enumerate(_RU_MONTHS, 1)}
    | {name: i for i, name in enumerate(_RU_MONTHS_GENITIVE, 1)},
}

BUILTIN_FREQUENCY_VOCAB: dict[Language, frozenset[str]] = {
    Language.ENGLISH: frozenset(
        "the of and to a in is it you that he was for on are with as his they be at one "
        "have this from or had by not but what some we can out other were all there "
        "when up use your how said an each she which do their time if will way about "
        "many then them would so these her has been who its new after more than".split()
    ),
    Language.RUSSIAN: frozenset(
        "и в не на я быть он с что а по это она этот к но они мы как из у который то за "
        "свой весь год от так о для ты же все тот мочь вы человек такой его сказать "
        "только или еще бы себя один как уже до время если сам когда другой вот говорить "
        "наш мой знать стать при чтобы дело жизнь кто первый очень два день ее новый "
        "также был была были было заявил после более".split()
    ),
}


@dataclass
class LanguageResources:
    """Everything the analysis stages need for one language."""
    language: Language
    frequency_vocab: frozenset[str] = frozenset()
    day_names: dict[str, int] = field(default_factory=dict)
    month_names: dict[str, int] = field(default_factory=dict)
    date_masks: list[str] = field(default_factory=list)
    term_clusters: dict[str, int] | None = None
    num_clusters: int = 0
    lemmas: dict[str, str] = field(default_factory=dict)
    lemma_suffix: str = ""
    categories: list[list[str]] = field(default_factory=list)
    category_thresholds: dict[str, float] = field(default_factory=dict)
    default_category_threshold: float = 0.0

    @property
    def has_embeddings(self) -> bool:
        return self.term_clusters is not None and self.num_clusters > 0

    def category_threshold(self, name: str) -> float:
        return self.category_thresholds.get(name, self.default_category_threshold)


def read_word_list(path: str | Path) -> list[str]:
    """Read one token per line, skipping blank lines."""
    text = _read_text(path)
    return [line.strip() for line in text.splitlines() if line.strip()]


def read_tagged_vocabulary(path: str | Path, start_tag: int, end_tag: int) -> dict[str, int]:
    """Tag lines by cycling through start_tag..end_tag (e.g. 1..12 for months)."""
    tagged: dict[str, int] = {}
    tag = start_tag
    for word in read_word_list(path):
        if tag > end_tag:
            tag = start_tag
        tagged[word.lower()] = tag
        tag += 1
    return tagged


def read_term_clusters(path: str | Path) -> tuple[dict[str, int], int]:
    """Read a term -> cluster id table. Returns (table, num_clusters)."""
    lines = _read_text(path).splitlines()
    if not lines:
        raise ResourceError(f"{path}: empty embedding table")
    try:
        vocab_size, num_clusters = (int(x) for x in lines[0].split())
    except ValueError as e:
        raise ResourceError(f"{path}: bad header {lines[0]!r}") from e

    table: dict[str, int] = {}
    for line in lines[1:]:
        parts = line.split()
        if len(parts) != 2:
            continue
        term, cluster = parts
        try:
            cluster_id = int(cluster)
        except ValueError:
            logger.warning(f"{path}: bad cluster id for {term!r}: {cluster!r}")
            continue
        if not 0 <= cluster_id < num_clusters:
            logger.warning(f"{path}: cluster id {cluster_id} out of range for {term!r}")
            continue
        table[term] = cluster_id

    if len(table) != vocab_size:
        logger.debug(f"{path}: header says {vocab_size} terms, read {len(table)}")
    return table, num_clusters


def read_lemmas(path: str | Path) -> dict[str, str]:
    """Read ``word lemma`` pairs."""
    lemmas = {}
    for line in read_word_list(path):
        parts = line.split()
        if len(parts) >= 2:
            lemmas[parts[0].lower()] = parts[1]
    return lemmas


def read_categories(path: str | Path) -> list[list[str]]:
    """Read category definitions; the first token of each line is the category name."""
    return [line.split() for line in read_word_list(path)]


def load_resources(config: dict[str, Any]) -> dict[Language, LanguageResources]:
    """Load resources for every configured language."""
    resources = {}
    for code in config.get("languages", []):
        language = Language.from_code(code)
        lang_cfg = config.get("resources", {}).get(code, {})
        resources[language] = load_language(language, lang_cfg)
    return resources


def load_language(language: Language, lang_cfg: dict[str, Any]) -> LanguageResources:
    """Load one language, falling back to built-ins where a file is unusable."""
    res = LanguageResources(
        language=language,
        date_masks=list(lang_cfg.get("date_masks", [])),
        lemma_suffix=lang_cfg.get("lemma_suffix", ""),
        category_thresholds=dict(lang_cfg.get("category_thresholds") or {}),
        default_category_threshold=float(lang_cfg.get("default_category_threshold", 0.0)),
    )

    res.frequency_vocab = _load(
        lang_cfg.get("frequency_vocab"),
        lambda p: frozenset(w.lower() for w in read_word_list(p)),
        BUILTIN_FREQUENCY_VOCAB.get(language, frozenset()),
    )
    res.day_names = _load(
        lang_cfg.get("day_names"),
        lambda p: read_tagged_vocabulary(p, 1, 31),
        BUILTIN_DAY_NAMES.get(language, {}),
    )
    res.month_names = _load(
        lang_cfg.get("month_names"),
        lambda p: read_tagged_vocabulary(p, 1, 12),
        BUILTIN_MONTH_NAMES.get(language, {}),
    )
    res.lemmas = _load(lang_cfg.get("lemma_table"), read_lemmas, {})
    res.categories = _load(lang_cfg.get("categories"), read_categories, [])

    table = _load(lang_cfg.get("embedding_table"), read_term_clusters, None)
    if table is not None:
        res.term_clusters, res.num_clusters = table
    else:
        logger.warning(f"No embedding table for '{language.code}': categories and threads are skipped")

    return res


def _load(path: str | None, reader: Callable[[str], T], default: T) -> T:
    if not path:
        return default
    try:
        return reader(path)
    except (OSError, ResourceError) as e:
        logger.warning(f"Cannot load resource {path}: {e}")
        return default


def _read_text(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8")
