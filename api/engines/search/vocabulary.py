"""
Static search vocabulary: synonym table and brand/keyword boosts.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple


@dataclass(frozen=True)
class SearchVocabulary:
    """Immutable synonym/boost configuration injected into the engine"""

    synonyms: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    boost_keywords: Tuple[str, ...] = ()
    boost_bonus: float = 2.0

    @classmethod
    def from_tables(
        cls,
        synonyms: Dict[str, Iterable[str]],
        boost_keywords: Iterable[str] = (),
        boost_bonus: float = 2.0,
    ) -> "SearchVocabulary":
        """Copy caller tables into a read-only mapping; keys and boost keywords are lowercased"""
        return cls(
            synonyms=MappingProxyType({key.lower(): tuple(values) for key, values in synonyms.items()}),
            boost_keywords=tuple(k.lower() for k in boost_keywords),
            boost_bonus=boost_bonus,
        )

    def synonyms_for(self, normalized_query: str) -> Tuple[str, ...]:
        return self.synonyms.get(normalized_query, ())


DEFAULT_VOCABULARY = SearchVocabulary.from_tables(
    synonyms={
        "laptop": [
            "notebook",
            "ultrabook",
            "computer",
            "pc",
            "xps",
            "xps13",
            "xp13",
            "macbook",
            "thinkpad",
            "dell",
            "lenovo",
            "hp",
        ],
        "phone": ["smartphone", "mobile"],
        "tv": ["television", "oled", "lcd"],
        "shoes": ["sneakers", "trainers"],
    },
    boost_keywords=["dell", "lenovo", "hp", "xps", "thinkpad", "macbook"],
)
