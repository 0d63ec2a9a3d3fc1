from ._models import QueryProperty, SourceFilter, TrackTotalHits

__all__ = [
    "QueryProperty",
    "SourceFilter",
    "TrackTotalHits",
]
