import pytest

from assumeshell.catalog import build_catalog, load_config
from assumeshell.errors import ConfigError, ProfileNotFound, SelectionCancelled
from assumeshell.resolver import (
    REGIONS,
    ClearIntent,
    ExplicitProfileIntent,
    InteractiveIntent,
    RegionOnlyIntent,
    ResolvedSession,
    resolve,
    select_region,
)
from tests.conftest import StubSelector

SORTED_CODES = [code for code, _ in sorted(REGIONS)]


@pytest.fixture
def catalog(config_path):
    return build_catalog(load_config(config_path))


def test_clear(catalog, environ):
    select = StubSelector()
    resolved = resolve(ClearIntent(), catalog, select, environ)
    assert resolved == ResolvedSession()
    assert select.calls == []


def test_region_only_explicit(catalog, environ):
    select = StubSelector()
    resolved = resolve(RegionOnlyIntent(region="ap-south-1"), catalog, select, environ)
    assert resolved.profile_name is None
    assert resolved.region == "ap-south-1"
    assert select.calls == []


def test_region_only_interactive(catalog, environ):
    idx = SORTED_CODES.index("eu-west-2")
    select = StubSelector(idx)
    resolved = resolve(RegionOnlyIntent(), catalog, select, environ)
    assert resolved == ResolvedSession(region="eu-west-2")


def test_region_list_sorted_and_labelled(environ):
    environ["AWS_DEFAULT_REGION"] = "us-east-2"
    select = StubSelector(0)
    assert select_region(select, environ) == SORTED_CODES[0]

    label, candidates = select.calls[0]
    assert label == "Regions (current: us-east-2)"
    titles = [c.title for c in candidates]
    assert titles == sorted(titles)
    assert titles[0].split("|")[0].strip() == SORTED_CODES[0]


def test_region_selection_cancelled(catalog, environ):
    with pytest.raises(SelectionCancelled):
        resolve(RegionOnlyIntent(), catalog, StubSelector(None), environ)


def test_explicit_profile_with_region(catalog, environ):
    environ["AWS_DEFAULT_REGION"] = "eu-west-1"
    select = StubSelector()
    resolved = resolve(ExplicitProfileIntent("dev"), catalog, select, environ)

    # Profile region wins over the ambient one
    assert resolved == ResolvedSession(
        profile_name="dev",
        region="us-east-1",
        role_arn="arn:aws:iam::111122223333:role/Deployer",
    )
    assert select.calls == []


def test_explicit_profile_falls_back_to_ambient_region(catalog, environ):
    environ["AWS_DEFAULT_REGION"] = "eu-west-1"
    select = StubSelector()
    resolved = resolve(ExplicitProfileIntent("ops"), catalog, select, environ)
    assert resolved.region == "eu-west-1"
    assert select.calls == []


def test_explicit_profile_falls_back_to_region_prompt(catalog, environ):
    select = StubSelector(SORTED_CODES.index("sa-east-1"))
    resolved = resolve(ExplicitProfileIntent("ops"), catalog, select, environ)
    assert resolved.region == "sa-east-1"
    assert len(select.calls) == 1


def test_empty_ambient_region_is_ignored(catalog, environ):
    environ["AWS_DEFAULT_REGION"] = ""
    select = StubSelector(SORTED_CODES.index("us-west-1"))
    resolved = resolve(ExplicitProfileIntent("ops"), catalog, select, environ)
    assert resolved.region == "us-west-1"


def test_explicit_profile_not_found(catalog, environ):
    with pytest.raises(ProfileNotFound) as exc:
        resolve(ExplicitProfileIntent("prod"), catalog, StubSelector(), environ)
    assert exc.value.name == "prod"
    assert "prod" in str(exc.value)


def test_plain_profile_has_no_role(catalog, environ):
    resolved = resolve(ExplicitProfileIntent("base"), catalog, StubSelector(), environ)
    assert resolved.role_arn is None


def test_assume_disabled_carried(catalog, environ):
    resolved = resolve(ExplicitProfileIntent("dev", assume_disabled=True), catalog, StubSelector(), environ)
    assert resolved.assume_disabled is True


def test_interactive_profile(catalog, environ):
    environ["AWS_PROFILE"] = "base"
    select = StubSelector(1)
    resolved = resolve(InteractiveIntent(), catalog, select, environ)
    assert resolved.profile_name == "dev"
    assert resolved.region == "us-east-1"

    label, candidates = select.calls[0]
    assert label == "3 profiles (current: base)"
    # Config-file order, account ID searchable in the title
    assert [c.title.split()[0] for c in candidates] == ["base", "dev", "ops"]
    assert "111122223333" in candidates[1].title
    assert "Role: Deployer" in candidates[1].description


def test_interactive_profile_then_region_prompt(catalog, environ):
    select = StubSelector(2, SORTED_CODES.index("ca-central-1"))
    resolved = resolve(InteractiveIntent(), catalog, select, environ)
    assert resolved.profile_name == "ops"
    assert resolved.region == "ca-central-1"
    assert len(select.calls) == 2


def test_interactive_cancelled(catalog, environ):
    select = StubSelector(None)
    with pytest.raises(SelectionCancelled):
        resolve(InteractiveIntent(), catalog, select, environ)
    assert len(select.calls) == 1


def test_interactive_empty_catalog(environ):
    with pytest.raises(ConfigError):
        resolve(InteractiveIntent(), build_catalog({}), StubSelector(), environ)
