"""
Business Entity - A single search result as returned by Yelp Fusion.

Only the fields the bot renders are kept; everything else in the
provider payload is dropped on parse.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Category:
    title: str
    alias: str = ""


@dataclass(frozen=True)
class Business:
    name: str
    url: str
    rating: float
    categories: list[Category] = field(default_factory=list)

    @property
    def primary_category(self) -> str:
        """Title of the first category, empty when Yelp returns none."""
        return self.categories[0].title if self.categories else ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Business":
        return cls(
            name=data["name"],
            url=data["url"],
            rating=data["rating"],
            categories=[
                Category(title=c.get("title", ""), alias=c.get("alias", ""))
                for c in data.get("categories") or []
            ],
        )


@dataclass(frozen=True)
class SearchResponse:
    businesses: list[Business]
    total: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchResponse":
        businesses = [Business.from_dict(b) for b in data.get("businesses", [])]
        return cls(businesses=businesses, total=data.get("total", len(businesses)))
