"""Turn what the user asked for into an effective profile + region."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Union

from assumeshell.catalog import Catalog, Profile
from assumeshell.errors import ConfigError, ProfileNotFound, SelectionCancelled
from assumeshell.selector import Candidate, SelectFn

logger = logging.getLogger(__name__)

REGIONS = [
    ("af-south-1", "Cape Town"),
    ("ap-east-1", "Hong Kong"),
    ("ap-northeast-1", "Tokyo"),
    ("ap-northeast-2", "Seoul"),
    ("ap-northeast-3", "Osaka"),
    ("ap-south-1", "Mumbai"),
    ("ap-south-2", "Hyderabad"),
    ("ap-southeast-1", "Singapore"),
    ("ap-southeast-2", "Sydney"),
    ("ap-southeast-3", "Jakarta"),
    ("ap-southeast-4", "Melbourne"),
    ("ca-central-1", "Central"),
    ("cn-north-1", "Beijing"),
    ("cn-northwest-1", "Ningxia"),
    ("eu-central-1", "Frankfurt"),
    ("eu-central-2", "Zurich"),
    ("eu-north-1", "Stockholm"),
    ("eu-south-1", "Milan"),
    ("eu-south-2", "Spain"),
    ("eu-west-1", "Ireland"),
    ("eu-west-2", "London"),
    ("eu-west-3", "Paris"),
    ("il-central-1", "Tel Aviv"),
    ("me-central-1", "UAE"),
    ("me-south-1", "Bahrain"),
    ("sa-east-1", "São Paulo"),
    ("us-east-1", "N. Virginia"),
    ("us-east-2", "Ohio"),
    ("us-west-1", "N. California"),
    ("us-west-2", "Oregon"),
]


@dataclass(frozen=True)
class ClearIntent:
    assume_disabled: bool = False


@dataclass(frozen=True)
class RegionOnlyIntent:
    region: str | None = None
    assume_disabled: bool = False


@dataclass(frozen=True)
class ExplicitProfileIntent:
    name: str
    assume_disabled: bool = False


@dataclass(frozen=True)
class InteractiveIntent:
    assume_disabled: bool = False


Intent = Union[ClearIntent, RegionOnlyIntent, ExplicitProfileIntent, InteractiveIntent]


@dataclass(frozen=True)
class ResolvedSession:
    profile_name: str | None = None
    region: str | None = None
    role_arn: str | None = None
    assume_disabled: bool = False


def _profile_candidate(profile: Profile) -> Candidate:
    # The search filter matches on the title, so the account ID goes in it too
    title = f"{profile.name}  {profile.account_id}" if profile.account_id else profile.name
    details = (
        f"AccountID: {profile.account_id or '-'} | Role: {profile.role_name or '-'} | "
        f"Region: {profile.region or '-'} | Source: {profile.source_profile or '-'}"
    )
    return Candidate(title=title, description=details)


def select_region(select: SelectFn, environ: Mapping[str, str] = os.environ) -> str:
    """Ask the user for a region from the static, sorted region list."""
    regions = sorted(REGIONS)
    width = max(len(code) for code, _ in regions)
    candidates = [Candidate(title=f"{code.ljust(width)} | {name}") for code, name in regions]
    current = environ.get("AWS_DEFAULT_REGION", "")

    idx = select(f"Regions (current: {current})", candidates)
    if idx is None:
        raise SelectionCancelled("Region selection cancelled")
    return regions[idx][0]


def select_profile(catalog: Catalog, select: SelectFn,
                   environ: Mapping[str, str] = os.environ) -> Profile:
    """Ask the user for a profile, presented in config-file order."""
    if not len(catalog):
        raise ConfigError("No [profile ...] sections found in AWS config")

    current = environ.get("AWS_PROFILE", "")
    label = f"{len(catalog)} profiles (current: {current})"
    idx = select(label, [_profile_candidate(p) for p in catalog])
    if idx is None:
        raise SelectionCancelled("Profile selection cancelled")
    return catalog[idx]


def resolve_region(profile: Profile, select: SelectFn,
                   environ: Mapping[str, str] = os.environ) -> str:
    """Region precedence: the profile's own, then $AWS_DEFAULT_REGION, then ask."""
    if profile.region:
        return profile.region
    ambient = environ.get("AWS_DEFAULT_REGION", "")
    if ambient:
        logger.debug("Profile %s has no region, using AWS_DEFAULT_REGION=%s", profile.name, ambient)
        return ambient
    return select_region(select, environ)


def resolve(intent: Intent, catalog: Catalog, select: SelectFn,
            environ: Mapping[str, str] = os.environ) -> ResolvedSession:
    """Produce the effective session for ``intent``.

    Raises:
        ProfileNotFound: an explicit profile name is not in the catalog.
        SelectionCancelled: the user cancelled an interactive prompt.
        ConfigError: interactive selection over an empty catalog.
    """
    if isinstance(intent, ClearIntent):
        return ResolvedSession(assume_disabled=intent.assume_disabled)

    if isinstance(intent, RegionOnlyIntent):
        region = intent.region or select_region(select, environ)
        return ResolvedSession(region=region, assume_disabled=intent.assume_disabled)

    if isinstance(intent, ExplicitProfileIntent):
        profile = catalog.get(intent.name)
        if profile is None:
            raise ProfileNotFound(intent.name)
    elif isinstance(intent, InteractiveIntent):
        profile = select_profile(catalog, select, environ)
    else:
        raise TypeError(f"Unsupported intent: {intent!r}")

    return ResolvedSession(
        profile_name=profile.name,
        region=resolve_region(profile, select, environ),
        role_arn=profile.role_arn or None,
        assume_disabled=intent.assume_disabled,
    )
