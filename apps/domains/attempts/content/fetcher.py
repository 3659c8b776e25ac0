# PATH: apps/domains/attempts/content/fetcher.py
"""
URL content retrieval for URL / LINK_FILE grading.

github.com
- /blob/ links      -> raw.githubusercontent.com content
- repository roots  -> README (main, then master) -> repo API summary -> page scrape
everything else     -> visible body text of the page

fetch() never raises: failures come back as is_functional=False.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional

import requests
from bs4 import BeautifulSoup
from django.conf import settings

logger = logging.getLogger(__name__)

_BLOB_RE = re.compile(r"^https://github\.com/([^/]+)/([^/]+)/blob/(.+)$")
_REPO_RE = re.compile(r"^https://github\.com/([^/]+)/([^/]+)/?$")
_WS_RE = re.compile(r"\s+")

_STRIP_TAGS = ["script", "style", "noscript", "iframe", "noembed", "embed", "object"]


@dataclass(frozen=True)
class FetchedContent:
    body: str
    is_functional: bool


def convert_github_url_to_raw(url: str) -> Optional[str]:
    m = _BLOB_RE.match(url or "")
    if not m:
        return None
    user, repo, path = m.groups()
    return f"https://raw.githubusercontent.com/{user}/{repo}/{path}"


def _collapse(text: str) -> str:
    return _WS_RE.sub(" ", text or "").strip()


class ContentFetcher:
    def __init__(self, *, timeout: Optional[float] = None, max_content_size: Optional[int] = None):
        self.timeout = float(
            timeout if timeout is not None else getattr(settings, "GRADING_URL_FETCH_TIMEOUT_SECONDS", 15)
        )
        self.max_content_size = int(
            max_content_size
            if max_content_size is not None
            else getattr(settings, "GRADING_URL_MAX_CONTENT_SIZE", 100_000)
        )

    # -----------------------------
    # public
    # -----------------------------
    def fetch(self, url: str) -> FetchedContent:
        try:
            return self._fetch(url)
        except requests.RequestException as e:
            logger.warning("url fetch failed, falling back to plain text: %s (%s)", url, e)

        try:
            return self.fetch_plain_text(url)
        except requests.RequestException as e:
            logger.warning("plain text fetch failed: %s (%s)", url, e)
            return FetchedContent(body="", is_functional=False)

    def fetch_plain_text(self, url: str) -> FetchedContent:
        html = self._get(url)
        soup = BeautifulSoup(html, "html.parser")
        for tag in soup(_STRIP_TAGS):
            tag.decompose()
        body = soup.body or soup
        return FetchedContent(body=self._truncate(_collapse(body.get_text(" "))), is_functional=True)

    # -----------------------------
    # internals
    # -----------------------------
    def _get(self, url: str) -> str:
        resp = requests.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return resp.text

    def _truncate(self, body: str) -> str:
        if len(body) > self.max_content_size:
            return body[: self.max_content_size]
        return body

    def _fetch(self, url: str) -> FetchedContent:
        if "github.com" not in url:
            return self.fetch_plain_text(url)

        if "/blob/" in url:
            raw_url = convert_github_url_to_raw(url)
            if not raw_url:
                return FetchedContent(body="", is_functional=False)
            return FetchedContent(body=self._truncate(self._get(raw_url)), is_functional=True)

        m = _REPO_RE.match(url)
        if m:
            found = self._first_success(self._repo_steps(*m.groups()))
            if found is not None:
                return found

        scraped = self._scrape_github_page(url)
        if scraped is not None:
            return scraped
        return FetchedContent(body="", is_functional=False)

    def _repo_steps(self, user: str, repo: str) -> List[Callable[[], FetchedContent]]:
        def readme(branch: str) -> Callable[[], FetchedContent]:
            def _step() -> FetchedContent:
                text = self._get(f"https://raw.githubusercontent.com/{user}/{repo}/{branch}/README.md")
                return FetchedContent(body=self._truncate(text), is_functional=True)
            return _step

        def repo_api() -> FetchedContent:
            resp = requests.get(f"https://api.github.com/repos/{user}/{repo}", timeout=self.timeout)
            resp.raise_for_status()
            info = resp.json()
            body = (
                f"Repository: {info.get('full_name')}\n"
                f"Description: {info.get('description') or 'No description'}\n"
                f"Stars: {info.get('stargazers_count')}\n"
                f"Forks: {info.get('forks_count')}\n"
                f"Language: {info.get('language') or 'Not specified'}\n"
                f"Last Updated: {info.get('updated_at')}"
            )
            return FetchedContent(body=body, is_functional=True)

        return [readme("main"), readme("master"), repo_api]

    def _first_success(self, steps: List[Callable[[], FetchedContent]]) -> Optional[FetchedContent]:
        for step in steps:
            try:
                return step()
            except (requests.RequestException, ValueError) as e:
                logger.info("github fetch step failed: %s", e)
        return None

    def _scrape_github_page(self, url: str) -> Optional[FetchedContent]:
        try:
            html = self._get(url)
        except requests.RequestException as e:
            logger.info("github page scrape failed: %s (%s)", url, e)
            return None

        soup = BeautifulSoup(html, "html.parser")
        for tag in soup(_STRIP_TAGS):
            tag.decompose()

        content = ""
        readme = soup.select_one("article.markdown-body")
        if readme is not None:
            content = readme.get_text(" ").strip()
        else:
            about = soup.select_one(".Box-body")
            if about is not None:
                content += about.get_text(" ").strip() + "\n\n"
            rows = soup.select(
                "div.js-details-container div.js-navigation-container tr.js-navigation-item"
            )
            names = [r.select_one(".js-navigation-open") for r in rows]
            names = [n.get_text().strip() for n in names if n is not None and n.get_text().strip()]
            if names:
                content += "Repository Files:\n" + "".join(f"- {n}\n" for n in names)

        if not content:
            return None
        return FetchedContent(body=self._truncate(_collapse(content)), is_functional=True)
