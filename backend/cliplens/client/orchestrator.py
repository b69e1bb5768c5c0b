"""
Search orchestration: the top-level state holder of the search UI.

Phases:
    idle -> searching -> done | errored                      (direct prompt)
    idle -> engineering -> searching -> done | errored       (custom prompt)

The engineered prompt must be known before the search is issued; an
engineering failure goes straight to errored without searching. Every
failure clears the previous result set, and every successful search
replaces it wholesale.
"""
import logging
from enum import Enum
from typing import Callable, List, Optional

from cliplens.client.api import ProxyApiClient, ProxyRequestError
from cliplens.client.models import SearchQuery, SearchResultSet

logger = logging.getLogger(__name__)

INDEX_REQUIRED_MESSAGE = "Please enter an Index ID"
SEARCH_FAILED_MESSAGE = "An error occurred during the search."
CUSTOM_SEARCH_FAILED_MESSAGE = "An error occurred during the custom search process."

Listener = Callable[["SearchOrchestrator"], None]


class SearchPhase(str, Enum):
    IDLE = "idle"
    ENGINEERING = "engineering"
    SEARCHING = "searching"
    DONE = "done"
    ERRORED = "errored"


class SearchOrchestrator:
    """Owns the query text, result set and loading/error flags."""

    def __init__(self, api: ProxyApiClient, index_id: str = ""):
        self.api = api
        self.index_id = index_id
        self.query_text = ""
        self.engineered_prompt = ""
        self.results: Optional[SearchResultSet] = None
        self.phase = SearchPhase.IDLE
        self.error: Optional[str] = None
        self._listeners: List[Listener] = []

    @property
    def loading(self) -> bool:
        return self.phase in (SearchPhase.ENGINEERING, SearchPhase.SEARCHING)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def set_index_id(self, index_id: str) -> None:
        if index_id == self.index_id:
            return
        self.index_id = index_id
        self._notify()

    def _has_index(self) -> bool:
        if self.index_id and self.index_id.strip():
            return True
        self._fail(INDEX_REQUIRED_MESSAGE)
        return False

    def _fail(self, message: str) -> None:
        self.phase = SearchPhase.ERRORED
        self.error = message
        self.results = None
        self._notify()

    async def search(self, prompt: str) -> Optional[SearchResultSet]:
        """Search with the given prompt as-is."""
        if not self._has_index():
            return None

        self.query_text = prompt
        self.phase = SearchPhase.SEARCHING
        self.error = None
        self._notify()

        query = SearchQuery(
            index_id=self.index_id.strip(),
            prompt_text=prompt,
            credential=self.api.config.api_key
        )
        try:
            results = await self.api.search(query)
        except ProxyRequestError as e:
            logger.error(f"Error searching for {prompt!r}: {e}")
            self._fail(e.server_message or SEARCH_FAILED_MESSAGE)
            return None
        except Exception as e:
            logger.exception(f"Unexpected error searching for {prompt!r}: {e}")
            self._fail(SEARCH_FAILED_MESSAGE)
            return None

        self.results = results
        self.phase = SearchPhase.DONE
        self._notify()
        return results

    async def custom_search(self, raw_prompt: str) -> Optional[SearchResultSet]:
        """Engineer the raw prompt first, then search with the engineered text."""
        if not raw_prompt or not raw_prompt.strip():
            return None
        if not self._has_index():
            return None

        self.query_text = raw_prompt
        self.results = None
        self.engineered_prompt = ""
        self.error = None
        self.phase = SearchPhase.ENGINEERING
        self._notify()

        try:
            engineered = await self.api.engineer_prompt(raw_prompt)
        except ProxyRequestError as e:
            logger.error(f"Error during custom search for {raw_prompt!r}: {e}")
            self._fail(e.server_message or CUSTOM_SEARCH_FAILED_MESSAGE)
            return None
        except Exception as e:
            logger.exception(f"Unexpected error engineering {raw_prompt!r}: {e}")
            self._fail(CUSTOM_SEARCH_FAILED_MESSAGE)
            return None

        self.engineered_prompt = engineered
        self._notify()

        return await self.search(engineered)
