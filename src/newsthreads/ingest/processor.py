"""Concurrent ingestion of HTML articles into Documents."""

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any

from ..errors import ParseError
from ..models import Document
from .html import HtmlParser
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

HTML_EXTENSIONS = {".html", ".htm"}


def process_file(file_path: Path, config: dict[str, Any], doc_id: str | None = None) -> Document:
    """Parse a single HTML file into a Document.

    doc_id defaults to the file name.

    Raises:
        ParseError: if the file can't be read or parsed.
    """
    try:
        result = HtmlParser().parse(file_path)
    except OSError as e:
        raise ParseError(str(file_path), str(e)) from e
    except Exception as e:
        raise ParseError(str(file_path), f"{type(e).__name__}: {e}") from e

    tokens = tokenize(result["content"], config.get("min_word_size", 1))
    return Document(
        doc_id=doc_id or file_path.name,
        tokens=tuple(tokens),
        title=result["title"],
    )


def find_html_files(data_path: Path) -> list[Path]:
    """All HTML files under data_path, recursively, in sorted order."""
    if not data_path.exists():
        return []
    return [
        p for p in sorted(data_path.rglob("*"))
        if p.is_file() and p.suffix.lower() in HTML_EXTENSIONS and not p.name.startswith(".")
    ]


def process_directory(data_path: Path, config: dict[str, Any], workers: int | None = None) -> dict[str, Document]:
    """Parse every HTML file under data_path on a thread pool.

    All files are parsed (or have failed) before this returns. A file that
    fails is logged and left out; it never aborts the batch.
    """
    files = find_html_files(data_path)
    workers = workers or config.get("workers") or os.cpu_count() or 1

    documents: dict[str, Document] = {}
    lock = threading.Lock()

    def ingest_one(file_path: Path) -> None:
        try:
            doc = process_file(file_path, config, file_path.relative_to(data_path).as_posix())
        except ParseError as e:
            logger.warning(f"Skipping {e.path}: {e.reason}")
            return
        except Exception as e:
            logger.error(f"Skipping {file_path}: {type(e).__name__}: {e}")
            return
        with lock:
            documents[doc.doc_id] = doc

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(ingest_one, f) for f in files]
        wait(futures)

    logger.info(f"Parsed {len(documents)} of {len(files)} file(s) with {workers} worker(s)")
    return dict(sorted(documents.items()))
