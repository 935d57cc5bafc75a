"""
Matcher service: tag, keyword and kind predicates over catalog entries.

Every matcher can test a LocationRecord in Python and can also render itself
as a SQLAlchemy clause, so stores filter rows in the database with bound
parameters while the engine keeps one definition of what "matches" means.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, FrozenSet, Iterable, List, Optional

from sqlalchemy import String, and_, false, func, not_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from locator.models.location import Location
from locator.schemas.location import LocationKind, LocationRecord

logger = logging.getLogger(__name__)

TERM_SEPARATORS = re.compile(r"[,;]")
WHITESPACE = re.compile(r"\s+", re.ASCII)
WHITESPACE_CHARS = (" ", "\t", "\n", "\r", "\f", "\v")


def _normalized(column) -> ColumnElement:
    return func.lower(func.coalesce(column, ""), type_=String)


def without_whitespace(expression) -> ColumnElement:
    """SQL counterpart of ``WHITESPACE.sub("", value)``."""
    for char in WHITESPACE_CHARS:
        expression = func.replace(expression, char, "", type_=String)
    return expression


def _text(value: Optional[str]) -> str:
    return (value or "").lower()


class LocationMatcher(ABC):
    """Predicate over catalog entries."""

    @abstractmethod
    def matches(self, record: LocationRecord) -> bool:
        """Return True if the entry satisfies the predicate."""

    @abstractmethod
    def clause(self) -> ColumnElement:
        """Equivalent SQL expression against the Location model."""

    @property
    def never(self) -> bool:
        """True when the predicate can be proven to match nothing."""
        return False

    def __and__(self, other: "LocationMatcher") -> "LocationMatcher":
        return AllOf(self, other)

    def __or__(self, other: "LocationMatcher") -> "LocationMatcher":
        return AnyOf(self, other)


class MatchNothing(LocationMatcher):
    def matches(self, record: LocationRecord) -> bool:
        return False

    def clause(self) -> ColumnElement:
        return false()

    @property
    def never(self) -> bool:
        return True


class KindMatcher(LocationMatcher):
    """Entries whose kind is in the given set."""

    def __init__(self, kinds: Iterable[LocationKind]):
        self.kinds: FrozenSet[LocationKind] = frozenset(kinds)

    def matches(self, record: LocationRecord) -> bool:
        return record.location_type in self.kinds

    def clause(self) -> ColumnElement:
        if not self.kinds:
            return false()
        return Location.location_type.in_(sorted(kind.value for kind in self.kinds))

    @property
    def never(self) -> bool:
        return not self.kinds


class TagMatcher(LocationMatcher):
    """Entries whose tag string contains ``#tag#``, ignoring case and spaces."""

    def __init__(self, tag: str):
        self.token = f"#{tag}#"

    def matches(self, record: LocationRecord) -> bool:
        return self.token in WHITESPACE.sub("", _text(record.location_tag))

    def clause(self) -> ColumnElement:
        stripped = without_whitespace(_normalized(Location.location_tag))
        return stripped.contains(self.token, autoescape=True)


class KeywordMatcher(LocationMatcher):
    """Entries whose name or blurb contains any of the terms."""

    def __init__(self, terms: Iterable[str]):
        self.terms: List[str] = [term.lower() for term in terms]

    def matches(self, record: LocationRecord) -> bool:
        name = _text(record.location_name)
        blurb = _text(record.location_blurb)
        return any(term in name or term in blurb for term in self.terms)

    def clause(self) -> ColumnElement:
        if not self.terms:
            return false()
        return or_(
            *(
                or_(
                    _normalized(Location.location_name).contains(term, autoescape=True),
                    _normalized(Location.location_blurb).contains(term, autoescape=True),
                )
                for term in self.terms
            )
        )

    @property
    def never(self) -> bool:
        return not self.terms


class ExcludeKeywordMatcher(LocationMatcher):
    """Entries whose name and blurb contain none of the terms."""

    def __init__(self, terms: Iterable[str]):
        self.terms: List[str] = [term.lower() for term in terms]

    def matches(self, record: LocationRecord) -> bool:
        name = _text(record.location_name)
        blurb = _text(record.location_blurb)
        return all(term not in name and term not in blurb for term in self.terms)

    def clause(self) -> ColumnElement:
        if not self.terms:
            return true()
        return and_(
            *(
                and_(
                    not_(_normalized(Location.location_name).contains(term, autoescape=True)),
                    not_(_normalized(Location.location_blurb).contains(term, autoescape=True)),
                )
                for term in self.terms
            )
        )


class FieldEquals(LocationMatcher):
    """Entries whose ``field`` equals ``value`` (e.g. parent center or country)."""

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value

    def matches(self, record: LocationRecord) -> bool:
        return getattr(record, self.field) == self.value

    def clause(self) -> ColumnElement:
        return getattr(Location, self.field) == self.value


class AllOf(LocationMatcher):
    def __init__(self, *matchers: LocationMatcher):
        self.matchers = matchers

    def matches(self, record: LocationRecord) -> bool:
        return all(matcher.matches(record) for matcher in self.matchers)

    def clause(self) -> ColumnElement:
        return and_(*(matcher.clause() for matcher in self.matchers))

    @property
    def never(self) -> bool:
        return any(matcher.never for matcher in self.matchers)


class AnyOf(LocationMatcher):
    def __init__(self, *matchers: LocationMatcher):
        self.matchers = matchers

    def matches(self, record: LocationRecord) -> bool:
        return any(matcher.matches(record) for matcher in self.matchers)

    def clause(self) -> ColumnElement:
        return or_(*(matcher.clause() for matcher in self.matchers))

    @property
    def never(self) -> bool:
        return all(matcher.never for matcher in self.matchers)


class MatcherService:
    """Builds matchers from raw request values."""

    @staticmethod
    def normalize_tag(tag: Optional[str]) -> str:
        """Trim, drop spaces and lowercase a tag."""
        return WHITESPACE.sub("", tag or "").lower()

    @staticmethod
    def split_terms(text: Optional[str]) -> List[str]:
        """Split on ',' or ';' and trim each term. Blank terms are dropped."""
        if not text:
            return []
        return [term.strip() for term in TERM_SEPARATORS.split(text) if term.strip()]

    @classmethod
    def parse_kinds(cls, text: Optional[str]) -> Optional[FrozenSet[LocationKind]]:
        """
        Parse a kind whitelist such as ``"Center;Event"``.

        Returns None when no whitelist was given. Unknown names are dropped,
        so a whitelist naming only unknown kinds matches nothing.
        """
        if not text:
            return None
        kinds = set()
        for name in cls.split_terms(text):
            try:
                kinds.add(LocationKind(name))
            except ValueError:
                logger.warning("Ignoring unknown location type in whitelist: %s", name)
        return frozenset(kinds)

    @classmethod
    def for_tag(
        cls, tag: Optional[str], kinds: Optional[Iterable[LocationKind]] = None
    ) -> LocationMatcher:
        """Tag mode. An empty or absent tag matches nothing."""
        normalized = cls.normalize_tag(tag)
        if not normalized:
            return MatchNothing()
        matcher: LocationMatcher = TagMatcher(normalized)
        if kinds is not None:
            matcher = matcher & KindMatcher(kinds)
        return matcher

    @classmethod
    def for_keywords(
        cls,
        keywords: Optional[str],
        exclude_keywords: Optional[str] = None,
        kinds: Optional[Iterable[LocationKind]] = None,
    ) -> LocationMatcher:
        """Keyword mode. No usable keyword matches nothing."""
        terms = cls.split_terms(keywords)
        if not terms:
            return MatchNothing()
        matcher: LocationMatcher = KeywordMatcher(terms)
        exclude_terms = cls.split_terms(exclude_keywords)
        if exclude_terms:
            matcher = matcher & ExcludeKeywordMatcher(exclude_terms)
        if kinds is not None:
            matcher = matcher & KindMatcher(kinds)
        return matcher

    @classmethod
    def for_combined_search(
        cls,
        keywords: Optional[str],
        exclude_keywords: Optional[str] = None,
        location_types: Optional[str] = None,
    ) -> LocationMatcher:
        """
        Mixed-catalog keyword search.

        Centers and satsangs always qualify; events must pass the keyword
        filter; the optional kind whitelist restricts both.
        """
        if not cls.split_terms(keywords):
            return MatchNothing()
        matcher: LocationMatcher = KindMatcher(
            [LocationKind.CENTER, LocationKind.SATSANG]
        ) | cls.for_keywords(keywords, exclude_keywords, kinds=[LocationKind.EVENT])
        whitelist = cls.parse_kinds(location_types)
        if whitelist is not None:
            matcher = matcher & KindMatcher(whitelist)
        return matcher


matcher_service = MatcherService()
