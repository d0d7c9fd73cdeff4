"""Abstract search interface and the shared search/visit dataclasses."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class RawSearchPayload:
    """Provider output before dedupe and budgeting (may hold repeats/blanks)."""

    text_bits: List[str] = field(default_factory=list)
    links: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.text_bits or self.links or self.images)


@dataclass
class SearchResult:
    """Final, budgeted search output handed to callers and the cache."""

    text: str = ""
    links: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.text

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "links": list(self.links), "images": list(self.images)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchResult":
        return cls(
            text=str(data["text"]),
            links=[str(x) for x in data.get("links") or []],
            images=[str(x) for x in data.get("images") or []],
        )


@dataclass
class VisitResult:
    """Plain text extracted from one visited page."""

    link: str
    text: str

    def to_dict(self) -> Dict[str, str]:
        return {"link": self.link, "text": self.text}


class SearchProvider(ABC):
    """Abstract interface -- swap implementations without touching callers."""

    @abstractmethod
    async def query(self, query: str) -> RawSearchPayload:
        """Return the raw text bits, links and images found for *query*."""
        ...
