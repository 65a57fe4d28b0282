import logging

import requests

from pomocal.core.config import (
    BOOK_SEARCH_DISPLAY, HTTP_TIMEOUT, NAVER_BOOK_URL, NAVER_CLIENT_ID, NAVER_CLIENT_SECRET
)
from pomocal.core.models import BookInfo
from pomocal.core.utils import generate_id, strip_bold_tags

logger = logging.getLogger(__name__)


class BookSearchError(Exception):
    """Book search failed; the message is meant for the user."""


class BookAPIManager:
    """Searches books through the Naver book search API."""
    def __init__(self, client_id=NAVER_CLIENT_ID, client_secret=NAVER_CLIENT_SECRET, session=None):
        self.client_id = client_id
        self.client_secret = client_secret
        self.session = session or requests.Session()

    def _headers(self):
        return {
            'X-Naver-Client-Id': self.client_id,
            'X-Naver-Client-Secret': self.client_secret,
        }

    def search_books(self, query):
        """Return up to ten BookInfo results for query."""
        query = (query or '').strip()
        if not query:
            return []
        if not self.client_id or not self.client_secret:
            raise BookSearchError("Book search is not configured (missing Naver API credentials)")

        params = {'query': query, 'display': BOOK_SEARCH_DISPLAY, 'start': 1}
        logger.info("Searching Naver for: %s", query)
        try:
            response = self.session.get(NAVER_BOOK_URL, params=params, headers=self._headers(), timeout=HTTP_TIMEOUT)
        except requests.RequestException as e:
            logger.error("Book search error: %s", e)
            raise BookSearchError(f"Connection failed: {e}") from e

        logger.debug("HTTP Status Code: %s", response.status_code)
        if response.status_code != 200:
            raise BookSearchError(f"Naver API Error: {response.status_code}")

        try:
            items = response.json().get('items') or []
        except ValueError as e:
            raise BookSearchError("Invalid response from Naver API") from e

        logger.info("Found %d items", len(items))
        return [self._to_book(item) for item in items]

    @staticmethod
    def _to_book(item):
        return BookInfo(
            item.get('isbn') or generate_id(),
            strip_bold_tags(item.get('title', '')),
            authors=[strip_bold_tags(item.get('author'))],
            thumbnail_url=item.get('image'),
        )
