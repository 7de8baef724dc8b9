"""JSON result structures for each mode."""

import json
from typing import Any

from .models import OTHER_CATEGORY, Language, Thread
from .pipeline import Mode, PipelineResult

ANY_CATEGORY = "any"


def build_output(result: PipelineResult, top_entities: int = 5) -> Any:
    """Turn a PipelineResult into the JSON-ready structure of its mode."""
    if result.mode == Mode.LANGUAGES:
        return [
            {"lang_code": lang.code, "articles": articles}
            for lang, articles in sorted(result.languages.items())
            if lang != Language.UNKNOWN
        ]

    if result.mode == Mode.NEWS:
        return {"articles": result.news}

    if result.mode == Mode.CATEGORIES:
        return [
            {"category": name, "articles": result.categories[name]}
            for name in _category_order(result.categories)
        ]

    if result.mode == Mode.THREADS:
        return [_thread(result, t, top_entities) for t in result.threads]

    by_category: dict[str, list[dict]] = {}
    everything = []
    for ranked in result.ranked:
        category = result.thread_category(ranked.thread)
        entry = _thread(result, ranked.thread, top_entities)
        entry["category"] = category
        everything.append(entry)
        by_category.setdefault(category, []).append(entry)

    return [{"category": ANY_CATEGORY, "threads": everything}] + [
        {"category": name, "threads": by_category[name]}
        for name in _category_order(by_category)
    ]


def dumps(output: Any) -> str:
    return json.dumps(output, ensure_ascii=False, indent=2)


def _thread(result: PipelineResult, thread: Thread, top_entities: int) -> dict[str, Any]:
    return {
        "title": result.thread_title(thread),
        "articles": list(thread.members),
        "entities": result.thread_entities(thread, top_entities),
    }


def _category_order(names) -> list[str]:
    """Alphabetical, with "other" last."""
    return sorted(names, key=lambda n: (n == OTHER_CATEGORY, n))
