"""HTML article parser."""

from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup


class HtmlParser:
    """Parse HTML articles using BeautifulSoup."""

    def parse(self, file_path: Path) -> dict[str, Any]:
        text = file_path.read_text(encoding="utf-8", errors="replace")
        return self.parse_text(text, default_title=file_path.stem)

    def parse_text(self, text: str, default_title: str = "") -> dict[str, Any]:
        soup = BeautifulSoup(text, "lxml")

        title = self._title(soup) or default_title

        # Remove scripts and styles
        for tag in soup(["script", "style", "nav", "footer"]):
            tag.decompose()

        body = soup.body or soup
        content = body.get_text(separator="\n", strip=True)

        return {"content": content, "title": title}

    @staticmethod
    def _title(soup: BeautifulSoup) -> str:
        meta = soup.find("meta", attrs={"property": "og:title"})
        if meta and meta.get("content", "").strip():
            return meta["content"].strip()
        if soup.title and soup.title.string and soup.title.string.strip():
            return soup.title.string.strip()
        h1 = soup.find("h1")
        if h1:
            return h1.get_text(" ", strip=True)
        return ""
