"""
Results grid: one hydration controller per rendered clip.
"""
import logging
from typing import Callable, List, Optional

from cliplens.client.api import ProxyApiClient
from cliplens.client.hydration import ClipHydrationController
from cliplens.client.models import ClipMatch, SearchResultSet
from cliplens.client.orchestrator import SearchOrchestrator

logger = logging.getLogger(__name__)

ControllerFactory = Callable[[ClipMatch, str], ClipHydrationController]


class ResultsGrid:
    """
    Mounts a controller per clip and unmounts them all when the result set
    changes, so exactly one hydration state exists per rendered clip.
    """

    def __init__(self, api: ProxyApiClient, controller_factory: Optional[ControllerFactory] = None):
        self.api = api
        self.controller_factory = controller_factory or self._default_factory
        self.cards: List[ClipHydrationController] = []
        self.index_id = ""
        self._rendered: Optional[SearchResultSet] = None

    def _default_factory(self, clip: ClipMatch, index_id: str) -> ClipHydrationController:
        return ClipHydrationController(
            clip,
            index_id,
            self.api,
            poll_delay=self.api.config.stream_poll_seconds
        )

    def render(self, index_id: str, results: Optional[SearchResultSet]) -> None:
        self.clear()
        self.index_id = index_id
        self._rendered = results
        if not results:
            return

        for i, clip in enumerate(results):
            card = self.controller_factory(clip, index_id)
            card.key = f"{clip.video_id}-{i}"
            self.cards.append(card)
            card.mount()
        logger.debug(f"Rendered {len(self.cards)} cards for index {index_id}")

    def clear(self) -> None:
        for card in self.cards:
            card.unmount()
        self.cards = []
        self._rendered = None

    def bind(self, orchestrator: SearchOrchestrator) -> Callable[[], None]:
        """Follow an orchestrator: spinner while loading, re-render on new results."""
        return orchestrator.subscribe(self._on_orchestrator_change)

    def _on_orchestrator_change(self, orchestrator: SearchOrchestrator) -> None:
        if orchestrator.loading:
            if self.cards:
                self.clear()
            return

        if orchestrator.results is not self._rendered:
            self.render(orchestrator.index_id, orchestrator.results)
        elif orchestrator.index_id != self.index_id:
            self.index_id = orchestrator.index_id
            for card in self.cards:
                card.update_identity(orchestrator.index_id)
