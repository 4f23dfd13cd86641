"""Profile catalog built from the sections of an AWS config file."""

import configparser
import logging
from dataclasses import dataclass
from typing import Iterator

from assumeshell.errors import ConfigError
from assumeshell.utils import parse_role_arn

logger = logging.getLogger(__name__)

PROFILE_PREFIX = "profile "
DEFAULT_SECTION = "default"


@dataclass(frozen=True)
class Profile:
    name: str
    region: str = ""
    role_arn: str = ""
    account_id: str = ""
    role_name: str = ""
    source_profile: str = ""
    mfa_serial: str = ""


class Catalog:
    """Ordered, read-only set of profiles. Order is config-file order."""

    def __init__(self, profiles: list[Profile], default_region: str = ""):
        self._profiles = tuple(profiles)
        self._by_name = {p.name: p for p in self._profiles}
        self.default_region = default_region

    def get(self, name: str) -> Profile | None:
        return self._by_name.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Profile]:
        return iter(self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)

    def __getitem__(self, index: int) -> Profile:
        return self._profiles[index]


def load_config(path: str) -> dict[str, dict[str, str]]:
    """Read an AWS config file into ``{section: {key: value}}``, preserving order."""
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with open(path) as f:
            parser.read_file(f, source=path)
    except FileNotFoundError:
        raise ConfigError(f"AWS config file not found: {path}")
    except OSError as e:
        raise ConfigError(f"Cannot read AWS config file {path}: {e.strerror or e}")
    except configparser.Error as e:
        raise ConfigError(f"Cannot parse AWS config file {path}: {e}")

    sections = {name: dict(parser.items(name, raw=True)) for name in parser.sections()}
    logger.debug("Loaded %d section(s) from %s", len(sections), path)
    return sections


def _build_profile(name: str, section: dict[str, str]) -> Profile:
    role_arn = section.get("role_arn", "").strip()
    account_id = role_name = ""
    if role_arn:
        try:
            parsed = parse_role_arn(role_arn)
        except ConfigError as e:
            raise ConfigError(f"Profile '{name}': {e}")
        account_id = parsed["account"]
        role_name = parsed["name"]

    return Profile(
        name=name,
        region=section.get("region", "").strip(),
        role_arn=role_arn,
        account_id=account_id,
        role_name=role_name,
        source_profile=section.get("source_profile", "").strip(),
        mfa_serial=section.get("mfa_serial", "").strip(),
    )


def build_catalog(raw_sections: dict[str, dict[str, str]]) -> Catalog:
    """Turn raw config sections into a Catalog.

    Only ``[profile <name>]`` sections become profiles. The ``[default]``
    section contributes its region as ``Catalog.default_region``; any other
    section (sso-session, services, ...) is ignored.
    """
    profiles = []
    default_region = ""

    for section_name, section in raw_sections.items():
        if section_name == DEFAULT_SECTION:
            default_region = section.get("region", "").strip()
            continue
        if not section_name.startswith(PROFILE_PREFIX):
            logger.debug("Skipping non-profile section [%s]", section_name)
            continue

        name = section_name[len(PROFILE_PREFIX):].strip()
        if not name:
            raise ConfigError(f"Section [{section_name}] has an empty profile name")
        profiles.append(_build_profile(name, section))

    names = [p.name for p in profiles]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ConfigError(f"Duplicate profile name(s): {', '.join(duplicates)}")

    return Catalog(profiles, default_region=default_region)
