from collections import OrderedDict
from typing import Optional

from places_finder.models.base_model import AreaInfo, Coordinate

class ReverseGeocodeCache:
    """
    In-memory reverse geocode cache keyed by coordinates rounded to 5
    decimals (~1 m).

    With `capacity=None` the cache grows without bound for the life of the
    process; otherwise the least recently used entry is evicted.
    """

    def __init__(self, capacity: Optional[int] = 512, decimals: int = 5):
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be positive or None")
        self.capacity = capacity
        self.decimals = decimals
        self._entries: "OrderedDict[str, AreaInfo]" = OrderedDict()

    def key_for(self, coordinate: Coordinate) -> str:
        return coordinate.rounded_key(self.decimals)

    def get(self, coordinate: Coordinate) -> Optional[AreaInfo]:
        key = self.key_for(coordinate)
        info = self._entries.get(key)
        if info is not None:
            self._entries.move_to_end(key)
        return info

    def put(self, coordinate: Coordinate, info: AreaInfo) -> None:
        key = self.key_for(coordinate)
        self._entries[key] = info
        self._entries.move_to_end(key)
        if self.capacity is not None:
            while len(self._entries) > self.capacity:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, coordinate: Coordinate) -> bool:
        return self.key_for(coordinate) in self._entries
