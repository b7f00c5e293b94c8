"""
Search scopes.

A scope (publication) decides which content classes are searched, which
fields the terms are matched against and how each field is boosted.
"""
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


class Scope(str, Enum):
    RADAR = "radar"
    AUSTRALIAN_PRESCRIBER = "australian_prescriber"
    NPS = "nps"
    ALL = "all"


RADAR_PAGES: Tuple[str, ...] = ("Cms::RadarArticlePage",)
AUSTRALIAN_PRESCRIBER_PAGES: Tuple[str, ...] = (
    "Cms::ApArticlePage",
    "Cms::ApGenericPage",
    "Cms::FeedbackPage",
)
NPS_PAGES: Tuple[str, ...] = (
    "Cms::ClinicalNewsPage",
    "Cms::ConsumerInfoCardPage",
    "Cms::CpdActivityPage",
    "Cms::GenericContentPage",
    "Cms::ProgramPage",
    "Cms::MedicinePage",
    "Cms::FeedbackPage",
    "Cms::MediaReleasePage",
    "Cms::CampaignPage",
)
ALL_PAGES: Tuple[str, ...] = tuple(dict.fromkeys(RADAR_PAGES + AUSTRALIAN_PRESCRIBER_PAGES + NPS_PAGES))

ARTICLE_FIELDS = ("title", "internal_description", "keywords", "body", "_permalink")
NPS_FIELDS = ("title", "brand_name", "description", "keywords", "subject", "_permalink")
ALL_FIELDS = ("title", "brand_name", "internal_description", "description", "keywords", "subject", "body", "_permalink")

PRESCRIBER_PERMALINK_PREFIX = "australian-prescriber"
FEEDBACK_PERMALINK = "contact-us/give-feedback"


@dataclass(frozen=True)
class ScopeProfile:
    scope: Scope
    content_types: Tuple[str, ...]
    fields: Tuple[str, ...]
    boosts: Mapping[str, int]
    supports_author_lookup: bool = False
    excluded_permalinks: Tuple[str, ...] = ()
    # only excluded while a term filter is active
    term_excluded_prefixes: Tuple[str, ...] = ()


SCOPE_PROFILES: Mapping[Scope, ScopeProfile] = MappingProxyType({
    Scope.RADAR: ScopeProfile(
        scope=Scope.RADAR,
        content_types=RADAR_PAGES,
        fields=ARTICLE_FIELDS,
        boosts=MappingProxyType({"title": 10, "internal_description": 5, "keywords": 3}),
        term_excluded_prefixes=(PRESCRIBER_PERMALINK_PREFIX,),
    ),
    Scope.AUSTRALIAN_PRESCRIBER: ScopeProfile(
        scope=Scope.AUSTRALIAN_PRESCRIBER,
        content_types=AUSTRALIAN_PRESCRIBER_PAGES,
        fields=ARTICLE_FIELDS,
        boosts=MappingProxyType({"title": 10, "internal_description": 5, "keywords": 3}),
        supports_author_lookup=True,
        excluded_permalinks=(FEEDBACK_PERMALINK,),
    ),
    Scope.NPS: ScopeProfile(
        scope=Scope.NPS,
        content_types=NPS_PAGES,
        fields=NPS_FIELDS,
        boosts=MappingProxyType({"title": 10, "brand_name": 10, "description": 5, "subject": 3, "keywords": 2}),
        term_excluded_prefixes=(PRESCRIBER_PERMALINK_PREFIX,),
    ),
    Scope.ALL: ScopeProfile(
        scope=Scope.ALL,
        content_types=ALL_PAGES,
        fields=ALL_FIELDS,
        boosts=MappingProxyType({
            "title": 10, "brand_name": 10, "internal_description": 5,
            "description": 5, "subject": 3, "keywords": 2,
        }),
    ),
})

_PROFILES_BY_KEY = {scope.name: profile for scope, profile in SCOPE_PROFILES.items()}
_NON_KEY_CHARS = re.compile(r"[^A-Z_]")


def sanitize_scope_name(name: Optional[str]) -> str:
    return _NON_KEY_CHARS.sub("", str(name or "").upper())


def resolve_scope(name: Optional[str]) -> ScopeProfile:
    """Profile for a scope name; unknown or missing names get the ALL profile."""
    return _PROFILES_BY_KEY.get(sanitize_scope_name(name), SCOPE_PROFILES[Scope.ALL])


def content_types_for(name: Optional[str]) -> Tuple[str, ...]:
    return resolve_scope(name).content_types
