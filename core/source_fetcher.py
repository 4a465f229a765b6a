"""
Source Fetcher Module
Loads the raw HTML for one side of a comparison from a URL or a local file.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
import logging

import requests

from utils.file_utils import normalize_path, read_file_content
from .config import DEFAULT_FETCH_TIMEOUT
from .errors import SourceFetchError

logger = logging.getLogger(__name__)


@dataclass
class Source:
    location: str
    is_file: bool = False


@dataclass
class FetchResult:
    html: str
    source: str


def fetch_from_url(url: str, timeout: float = DEFAULT_FETCH_TIMEOUT) -> FetchResult:
    """Fetch HTML from a URL."""
    logger.info(f"Fetching {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise SourceFetchError(f"Failed to fetch {url}: {e}") from e
    logger.debug(f"Fetched {url}: status {response.status_code}, {len(response.text)} chars")
    return FetchResult(html=response.text, source=url)


def fetch_rendered(url: str, timeout: float = DEFAULT_FETCH_TIMEOUT) -> FetchResult:
    """Load a URL in headless Chromium and return the DOM after scripts ran."""
    from playwright.sync_api import Error as PlaywrightError, sync_playwright

    logger.info(f"Rendering {url} with Playwright")
    try:
        with sync_playwright() as playwright:
            browser = playwright.chromium.launch(headless=True)
            try:
                page = browser.new_page()
                page.goto(url, wait_until='networkidle', timeout=timeout * 1000)
                html = page.content()
            finally:
                browser.close()
    except PlaywrightError as e:
        raise SourceFetchError(f"Failed to fetch {url}: {e}") from e
    return FetchResult(html=html, source=url)


def fetch_from_file(file_path: Union[str, Path]) -> FetchResult:
    """Read HTML from a local file."""
    path = normalize_path(file_path)
    logger.info(f"Reading {path}")
    try:
        html = read_file_content(path)
    except OSError as e:
        raise SourceFetchError(f"Failed to read file {file_path}: {e}") from e
    return FetchResult(html=html, source=str(file_path))


def fetch_html(source: str, is_file: bool = False, render: bool = False,
               timeout: Optional[float] = None) -> FetchResult:
    """Fetch HTML from either URL or file path."""
    if is_file:
        return fetch_from_file(source)
    timeout = DEFAULT_FETCH_TIMEOUT if timeout is None else timeout
    if render:
        return fetch_rendered(source, timeout=timeout)
    return fetch_from_url(source, timeout=timeout)
