#!/usr/bin/env python3
"""
Run one search against a running ClipLens proxy and print the cards as
they hydrate.
Run from backend directory: python scripts/search_clips.py INDEX_ID "a dog on a beach" [--engineer]
"""
import argparse
import asyncio
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cliplens.client import (
    ClientConfig,
    ProxyApiClient,
    ResultsGrid,
    SearchOrchestrator,
    StreamStatus,
)
from cliplens.client.playback import PlaybackEngine
from cliplens.core.logging_config import configure_logging


class NullPlaybackEngine(PlaybackEngine):
    """Terminal has nothing to play into."""

    def is_supported(self) -> bool:
        return False


def print_card(card) -> None:
    state = card.state
    stream = state.stream_url if state.stream_status == StreamStatus.READY else state.status_message
    print(f"[{card.key}] {card.time_range} ({card.clip.confidence}) {state.title}")
    print(f"    stream: {stream}")
    print(f"    summary: {state.summary}")


async def run(args) -> int:
    config = ClientConfig(base_url=args.proxy, api_key=args.api_key)
    api = ProxyApiClient(config)
    orchestrator = SearchOrchestrator(api, index_id=args.index_id)

    grid = ResultsGrid(api)
    default_factory = grid.controller_factory

    def factory(clip, index_id):
        card = default_factory(clip, index_id)
        card.playback_factory = NullPlaybackEngine
        card.subscribe(print_card)
        return card

    grid.controller_factory = factory
    grid.bind(orchestrator)

    try:
        if args.engineer:
            await orchestrator.custom_search(args.prompt)
            if orchestrator.engineered_prompt:
                print(f"Engineered Prompt: {orchestrator.engineered_prompt}")
        else:
            await orchestrator.search(args.prompt)

        if orchestrator.error:
            print(f"Error: {orchestrator.error}")
            return 1

        print(f"{len(orchestrator.results or ())} clips found")

        deadline = asyncio.get_running_loop().time() + args.wait
        while asyncio.get_running_loop().time() < deadline:
            if all(c.state.stream_status != StreamStatus.PROCESSING for c in grid.cards):
                break
            await asyncio.sleep(1)
        await asyncio.gather(*(card.settle() for card in grid.cards))
        return 0
    finally:
        grid.clear()
        await api.aclose()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("index_id")
    parser.add_argument("prompt")
    parser.add_argument("--engineer", action="store_true", help="rewrite the prompt before searching")
    parser.add_argument("--proxy", default=ClientConfig.base_url)
    parser.add_argument("--api-key", default=os.environ.get("TWELVELABS_API_KEY"))
    parser.add_argument("--wait", type=float, default=120.0, help="seconds to wait for streams")
    args = parser.parse_args()

    configure_logging("WARNING")
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
