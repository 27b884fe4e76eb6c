# data_collection/models.py

import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TextIO

from utils.exceptions import ResponseParseError


def _as_str(value: Any) -> str:
    if value is None:
        return ''
    return str(value)


@dataclass
class Tweet:
    """
    One status from the search response.

    Only the fields the search/label pipeline consumes are modeled; the full
    JSON object is kept in `raw`.
    """
    id_str: str
    text: str
    user_id_str: str = ''
    created_at: str = ''
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_json(cls, status: Dict[str, Any]) -> 'Tweet':
        if not isinstance(status, dict):
            raise ResponseParseError(f"Expected a status object, got {type(status).__name__}")
        user = status.get('user') or {}
        id_str = status.get('id_str')
        if id_str is None and status.get('id') is not None:
            id_str = status['id']
        return cls(
            id_str=_as_str(id_str),
            text=_as_str(status.get('text')),
            user_id_str=_as_str(user.get('id_str')) if isinstance(user, dict) else '',
            created_at=_as_str(status.get('created_at')),
            raw=status,
        )


@dataclass
class SearchMetadata:
    completed_in: float = 0.0
    max_id_str: str = ''
    since_id_str: str = ''
    query: str = ''
    count: int = 0
    next_results: str = ''
    refresh_url: str = ''

    @classmethod
    def from_json(cls, data: Optional[Dict[str, Any]]) -> 'SearchMetadata':
        if not isinstance(data, dict):
            return cls()
        return cls(
            completed_in=float(data.get('completed_in') or 0.0),
            max_id_str=_as_str(data.get('max_id_str')),
            since_id_str=_as_str(data.get('since_id_str')),
            query=_as_str(data.get('query')),
            count=int(data.get('count') or 0),
            next_results=_as_str(data.get('next_results')),
            refresh_url=_as_str(data.get('refresh_url')),
        )


@dataclass
class SearchResponse:
    statuses: List[Tweet] = field(default_factory=list)
    metadata: SearchMetadata = field(default_factory=SearchMetadata)

    @classmethod
    def from_json(cls, payload: Any) -> 'SearchResponse':
        """
        Map a decoded search/tweets.json body onto a SearchResponse.

        Raises:
            ResponseParseError: payload is not an object or has no statuses list
        """
        if not isinstance(payload, dict):
            raise ResponseParseError(f"Expected a JSON object, got {type(payload).__name__}")
        statuses = payload.get('statuses')
        if not isinstance(statuses, list):
            raise ResponseParseError("Search response has no 'statuses' list")
        try:
            metadata = SearchMetadata.from_json(payload.get('search_metadata'))
        except (TypeError, ValueError) as e:
            raise ResponseParseError(f"Invalid search_metadata: {e}") from e
        return cls(
            statuses=[Tweet.from_json(status) for status in statuses],
            metadata=metadata,
        )

    def __len__(self) -> int:
        return len(self.statuses)

    def show(self, stream: Optional[TextIO] = None) -> None:
        """Print created_at, id, text and author id of each tweet, tab separated."""
        out = stream or sys.stdout
        for tweet in self.statuses:
            out.write(f"{tweet.created_at}\t{tweet.id_str}\t{tweet.text}\t{tweet.user_id_str}\n")
