"""Service functions for resolving the page titles of links.

These helpers back the "replace with page title" URL behavior. They fetch
a remote document, pull its ``<title>`` or OpenGraph title out with
BeautifulSoup, and cache the outcome so each URL is fetched at most once
per process. Concurrent lookups for the same URL share a single request.
"""

from __future__ import annotations

import functools
import hashlib
import logging
import re
import threading
import urllib.request
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Dict
from urllib.parse import unquote, urlparse

from bs4 import BeautifulSoup  # type: ignore
from django.core.cache import caches

from .config import TasklinksConfig, get_config
from .engine.schemes import is_scheme_safe, normalize_href

logger = logging.getLogger(__name__)

FETCHABLE_SCHEMES: set[str] = {"http", "https"}

OG_TITLE = re.compile(r"^og:title$", flags=re.IGNORECASE)

_MISSING = object()


def fetch_page_text(
    url: str,
    timeout: float = 5.0,
    *,
    max_bytes: int = 1024 * 1024,
    user_agent: str = "tasklinks/1.0",
) -> str | None:
    """Fetch ``url`` and return the decoded start of its body.

    Parameters
    ----------
    url:
        Absolute ``http`` or ``https`` URL of the page.
    timeout:
        Socket timeout (in seconds) for the request.
    max_bytes:
        Only this many bytes are read; titles live near the top of a page.
    user_agent:
        Value sent in the ``User-Agent`` header.

    Returns
    -------
    str or None
        The decoded text if the request succeeded; otherwise ``None``.
    """

    request = urllib.request.Request(
        url,
        headers={
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.1",
        },
    )
    try:
        with urllib.request.urlopen(request, timeout=timeout) as resp:
            data = resp.read(max_bytes)
            encoding = resp.headers.get_content_charset() or "utf-8"
            try:
                return data.decode(encoding, errors="replace")
            except LookupError:
                return data.decode("utf-8", errors="replace")
    except Exception as exc:
        logger.debug("Fetching %s failed: %s", url, exc)
        return None


def _make_soup(html: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "lxml")
    except Exception:
        # Fallback to html.parser if lxml isn't installed
        return BeautifulSoup(html, "html.parser")


def clip_title(title: str, max_length: int) -> str:
    """Collapse whitespace and cut ``title`` down to ``max_length`` characters."""

    title = " ".join(title.split())
    if len(title) <= max_length:
        return title
    return title[: max_length - 1].rstrip() + "…"


def extract_title(html: str, max_length: int = 200) -> str | None:
    """Return the page title from ``<title>``, else from ``og:title``.

    The OpenGraph lookup accepts the ``property`` and ``content``
    attributes in either order. Blank titles count as missing.
    """

    soup = _make_soup(html)

    if soup.title is not None:
        title = soup.title.get_text().strip()
        if title:
            return clip_title(title, max_length)

    meta = soup.find("meta", attrs={"property": OG_TITLE})
    if meta is not None:
        content = (meta.get("content") or "").strip()
        if content:
            return clip_title(content, max_length)

    return None


def url_basename(url: str) -> str:
    """Return the final path segment of ``url``, or its host when there is none.

    Used as the fallback title when a page title cannot be fetched.
    """

    candidate = url.strip()
    if is_scheme_safe(candidate):
        candidate = normalize_href(candidate)
    parsed = urlparse(candidate)
    path = parsed.path.rstrip("/")
    segment = path.split("/")[-1] if path else ""
    if segment:
        return unquote(segment)
    return parsed.hostname or url


def _resolved(value: str) -> Future[str]:
    future: Future[str] = Future()
    future.set_result(value)
    return future


class UrlMetadataService:
    """Resolve and cache page titles for URLs.

    Results, including fallbacks, are stored without expiry in the cache
    alias named by the ``title_fetch.cache_alias`` setting. While a fetch is
    running its ``Future`` sits in a pending map, so a second caller for the
    same URL waits on the same request instead of issuing another one.
    """

    def __init__(
        self,
        config: TasklinksConfig | None = None,
        *,
        cache_alias: str | None = None,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self.config = config or get_config()
        self.timeout = float(self.config.title_fetch("timeout"))
        self.cache_alias = cache_alias or self.config.title_fetch("cache_alias")
        self._executor = executor or ThreadPoolExecutor(
            max_workers=int(self.config.title_fetch("workers")),
            thread_name_prefix="tasklinks-title",
        )
        self._pending: Dict[str, Future[str]] = {}
        self._lock = threading.Lock()

    @property
    def cache(self):
        return caches[self.cache_alias]

    def fetch_title(self, url: str, fallback: str) -> str:
        """Return the title of ``url``, or ``fallback`` within ``timeout`` seconds.

        Never raises: network errors, missing titles and timeouts all yield
        ``fallback``, which is then cached like a real title.
        """

        future = self.submit(url, fallback)
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError:
            logger.info("Timed out after %.1fs resolving title for %s", self.timeout, url)
            self.cache.add(self._cache_key(url), fallback, timeout=None)
            return fallback

    def submit(self, url: str, fallback: str) -> Future[str]:
        """Return a ``Future`` for the title of ``url`` without waiting on it."""

        if url.startswith("file://"):
            return _resolved(fallback)

        key = self._cache_key(url)
        with self._lock:
            cached = self.cache.get(key, _MISSING)
            if cached is not _MISSING:
                return _resolved(cached)
            pending = self._pending.get(url)
            if pending is not None:
                return pending
            future = self._executor.submit(self._resolve, url, key, fallback)
            self._pending[url] = future
        return future

    def clear_cache(self) -> None:
        self.cache.clear()

    def _resolve(self, url: str, key: str, fallback: str) -> str:
        try:
            try:
                title = self._lookup(url)
            except Exception:
                logger.exception("Unexpected error resolving title for %s", url)
                title = None
            if not title:
                logger.debug("No title for %s, using fallback %r", url, fallback)
            self.cache.add(key, title or fallback, timeout=None)
            return self.cache.get(key, title or fallback)
        finally:
            with self._lock:
                self._pending.pop(url, None)

    def _lookup(self, url: str) -> str | None:
        if not is_scheme_safe(url):
            return None
        href = normalize_href(url.strip())
        if urlparse(href).scheme.lower() not in FETCHABLE_SCHEMES:
            return None
        html = fetch_page_text(
            href,
            timeout=self.timeout,
            max_bytes=int(self.config.title_fetch("max_bytes")),
            user_agent=self.config.title_fetch("user_agent"),
        )
        if not html:
            return None
        return extract_title(html, max_length=int(self.config.title_fetch("max_title_length")))

    @staticmethod
    def _cache_key(url: str) -> str:
        return "title:" + hashlib.sha256(url.encode("utf-8")).hexdigest()


@functools.lru_cache(maxsize=None)
def get_metadata_service() -> UrlMetadataService:
    """Return the process-wide title service."""

    return UrlMetadataService()
