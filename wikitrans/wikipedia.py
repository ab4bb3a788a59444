"""HTTP client for the MediaWiki action API of Wikipedia."""

from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional

import httpx

from .config import WikiConfig
from .models import LangLink, Language


class WikipediaError(RuntimeError):
    """Raised when the Wikipedia API cannot be reached or answers unexpectedly."""


class WikipediaClient:
    """Read-only wrapper around the ``api.php`` endpoint.

    Every query takes the wiki language as an argument; ``config.language`` is
    only the fallback and is never changed by the client.
    """

    def __init__(
        self,
        config: Optional[WikiConfig] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        debug: bool = False,
    ) -> None:
        self.config = config or WikiConfig()
        self._debug = debug
        self._client = httpx.Client(
            timeout=self.config.timeout,
            headers={"User-Agent": self.config.user_agent, "Accept": "application/json"},
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "WikipediaClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def language(self) -> str:
        return self.config.language

    def get_languages(self, language: Optional[str] = None) -> List[Language]:
        """Return every language known to the wiki, in API order."""

        data = self._query(
            {"meta": "siteinfo", "siprop": "languages"},
            language=language,
        )
        try:
            entries = data["query"]["languages"]
            languages = [
                Language(tag=str(entry["code"]), name=str(entry.get("name", entry.get("*", ""))))
                for entry in entries
            ]
        except (KeyError, TypeError) as exc:
            raise WikipediaError("Unexpected language list response schema") from exc

        # Tags are unique within one catalog; keep the first occurrence.
        seen: set[str] = set()
        unique: List[Language] = []
        for item in languages:
            if item.tag in seen:
                continue
            seen.add(item.tag)
            unique.append(item)
        return unique

    def search(self, term: str, language: Optional[str] = None) -> List[str]:
        """Return page titles matching ``term`` on the ``language`` wiki."""

        data = self._query(
            {
                "list": "search",
                "srsearch": term,
                "srwhat": "text",
                "srlimit": str(self.config.search_results),
            },
            language=language,
        )
        try:
            return [str(hit["title"]) for hit in data["query"]["search"]]
        except (KeyError, TypeError) as exc:
            raise WikipediaError("Unexpected search response schema") from exc

    def get_langlinks(self, title: str, language: Optional[str] = None) -> List[LangLink]:
        """Return the inter-language links of the page ``title``."""

        data = self._query(
            {"prop": "langlinks", "titles": title, "lllimit": "max"},
            language=language,
        )
        try:
            pages = data["query"]["pages"]
            links: List[LangLink] = []
            for page in pages:
                for entry in page.get("langlinks", []):
                    raw_title = entry.get("title", entry.get("*"))
                    links.append(
                        LangLink(
                            tag=str(entry["lang"]),
                            title=str(raw_title) if raw_title is not None else None,
                        )
                    )
        except (KeyError, TypeError, AttributeError) as exc:
            raise WikipediaError("Unexpected langlinks response schema") from exc
        return links

    def _query(self, params: Dict[str, str], *, language: Optional[str]) -> Dict[str, Any]:
        url = self.config.endpoint(language)
        full_params = {"action": "query", "format": "json", "formatversion": "2", **params}
        if self._debug:
            print(f"[debug] Wikipedia request url={url} params={params}", file=sys.stderr)

        try:
            response = self._client.get(url, params=full_params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise WikipediaError(
                f"Wikipedia API returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise WikipediaError(f"Failed to connect to Wikipedia API at {url}") from exc

        if self._debug:
            print(
                f"[debug] Wikipedia response status={response.status_code} bytes={len(response.content)}",
                file=sys.stderr,
            )

        try:
            parsed = response.json()
        except ValueError as exc:
            raise WikipediaError("Wikipedia API returned invalid JSON") from exc

        if not isinstance(parsed, dict):
            raise WikipediaError("Wikipedia API returned an unexpected payload")
        if "error" in parsed:
            error = parsed["error"]
            info = error.get("info") if isinstance(error, dict) else error
            raise WikipediaError(f"Wikipedia API error: {info}")
        return parsed


__all__ = ["WikipediaClient", "WikipediaError"]
