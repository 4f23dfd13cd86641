from assumeshell.auth import Credentials
from assumeshell.environment import SetVar, UnsetVar, apply, plan
from assumeshell.resolver import ResolvedSession

CREDS = Credentials("ASIAEXAMPLE", "secret-value", "token-value")
CRED_VARS = {"AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_SESSION_TOKEN"}


def test_plan_clear():
    delta = plan(ResolvedSession())
    assert delta == (("AWS_PROFILE", UnsetVar()), ("AWS_DEFAULT_REGION", UnsetVar()))


def test_plan_clear_ignores_credentials():
    assert plan(ResolvedSession(), CREDS) == plan(ResolvedSession())


def test_plan_region_only():
    delta = plan(ResolvedSession(region="eu-west-1"))
    assert delta == (("AWS_DEFAULT_REGION", SetVar("eu-west-1")),)
    assert "AWS_PROFILE" not in dict(delta)


def test_plan_profile():
    delta = plan(ResolvedSession(profile_name="base", region="us-west-2"))
    assert delta == (
        ("AWS_PROFILE", SetVar("base")),
        ("AWS_DEFAULT_REGION", SetVar("us-west-2")),
    )


def test_plan_profile_with_credentials():
    delta = dict(plan(ResolvedSession(profile_name="dev", region="us-east-1"), CREDS))
    assert delta == {
        "AWS_PROFILE": SetVar("dev"),
        "AWS_DEFAULT_REGION": SetVar("us-east-1"),
        "AWS_ACCESS_KEY_ID": SetVar("ASIAEXAMPLE"),
        "AWS_SECRET_ACCESS_KEY": SetVar("secret-value"),
        "AWS_SESSION_TOKEN": SetVar("token-value"),
    }


def test_plan_without_credentials_sets_no_credential_vars():
    delta = dict(plan(ResolvedSession(profile_name="dev", region="us-east-1", role_arn="arn:aws:iam::1:role/x")))
    assert not CRED_VARS & set(delta)


def test_apply():
    env = {"AWS_PROFILE": "old", "KEEP": "1"}
    apply(plan(ResolvedSession(profile_name="dev", region="us-east-1"), CREDS), env)
    assert env == {
        "KEEP": "1",
        "AWS_PROFILE": "dev",
        "AWS_DEFAULT_REGION": "us-east-1",
        "AWS_ACCESS_KEY_ID": "ASIAEXAMPLE",
        "AWS_SECRET_ACCESS_KEY": "secret-value",
        "AWS_SESSION_TOKEN": "token-value",
    }


def test_apply_unset_missing_is_noop():
    env = {"AWS_DEFAULT_REGION": "eu-west-1", "OTHER": "x"}
    apply(plan(ResolvedSession()), env)
    assert env == {"OTHER": "x"}


def test_setvar_repr_hides_value():
    assert "secret-value" not in repr(SetVar("secret-value"))
