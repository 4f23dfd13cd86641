"""
Shared test fixtures.
"""

import textwrap

import pytest

SAMPLE_CONFIG = """
[default]
region = eu-central-1

[profile base]
region = us-west-2

[profile dev]
role_arn = arn:aws:iam::111122223333:role/Deployer
source_profile = base
region = us-east-1

[profile ops]
role_arn = arn:aws:iam::444455556666:role/team/OpsAdmin
source_profile = base
mfa_serial = arn:aws:iam::123456789012:mfa/jane

[sso-session corp]
sso_start_url = https://corp.awsapps.com/start
"""


class StubSelector:
    """Stands in for the interactive picker: records calls, returns canned answers."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.calls = []

    def __call__(self, label, candidates):
        self.calls.append((label, list(candidates)))
        return self.answers.pop(0)


@pytest.fixture
def write_config(tmp_path):
    """Write a config file and return its path."""
    def _write(content=SAMPLE_CONFIG, name="config"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(content))
        return str(path)
    return _write


@pytest.fixture
def config_path(write_config):
    return write_config()


@pytest.fixture
def environ():
    """A fake process environment; tests never touch os.environ."""
    return {"HOME": "/home/jane", "SHELL": "/bin/zsh"}
