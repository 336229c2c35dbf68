"""
Result types returned by the services

ListingResult tells "real rows" apart from "demo rows shown so the page
is never blank" and from "nothing matched". MutationResult is the
success/error pair every update returns instead of raising.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ListingResult:

    LIVE = 'live'
    FALLBACK = 'fallback'
    EMPTY = 'empty'

    source: str
    rows: List[dict] = field(default_factory=list)

    @classmethod
    def live(cls, rows):
        # In-memory filters can leave nothing behind
        if not rows:
            return cls.empty()
        return cls(cls.LIVE, list(rows))

    @classmethod
    def fallback(cls, rows):
        return cls(cls.FALLBACK, list(rows))

    @classmethod
    def empty(cls):
        return cls(cls.EMPTY, [])

    @property
    def is_live(self):
        return self.source == self.LIVE

    @property
    def is_fallback(self):
        return self.source == self.FALLBACK

    @property
    def is_empty(self):
        return self.source == self.EMPTY

    def __iter__(self):
        return iter(self.rows)

    def __len__(self):
        return len(self.rows)

    def as_dict(self):
        return {'source': self.source, 'count': len(self.rows), 'results': self.rows}


@dataclass
class MutationResult:

    success: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls):
        return cls(True)

    @classmethod
    def failure(cls, error):
        return cls(False, error)

    def as_dict(self):
        data = {'success': self.success}
        if self.error:
            data['error'] = self.error
        return data
