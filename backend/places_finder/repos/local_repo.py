"""
Local file-based repository for the recent searches list.
Uses a single JSON file; the most recent label comes first.
"""
import json
import logging
from pathlib import Path
from typing import List, Optional

from places_finder.core.config import settings
from places_finder.core.logger import logs


class RecentSearchRepository:
    """Repository for storing recent search labels in a local JSON file."""

    def __init__(self, path: Optional[str] = None, limit: Optional[int] = None):
        self.path = Path(path or settings.RECENT_SEARCHES_PATH)
        self.limit = limit or settings.RECENT_SEARCHES_LIMIT
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _read(self) -> List[str]:
        if not self.path.exists():
            return []
        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return [str(item) for item in data] if isinstance(data, list) else []

    async def list(self) -> List[str]:
        """Recent searches, most recent first."""
        try:
            return self._read()[:self.limit]
        except (OSError, ValueError) as e:
            logs.log(logging.ERROR, f"Failed to read recent searches: {str(e)}")
            return []

    async def add(self, label: str) -> List[str]:
        """Move (or put) `label` at the front, keeping at most `limit` entries."""
        label = (label or "").strip()
        if not label:
            return await self.list()

        searches = [item for item in await self.list() if item != label]
        searches = [label] + searches[:self.limit - 1]

        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(searches, f, indent=2)
        except OSError as e:
            logs.log(logging.ERROR, f"Failed to save recent searches: {str(e)}")
        return searches

    async def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
