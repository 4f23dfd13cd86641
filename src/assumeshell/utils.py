import os
from pathlib import Path

from assumeshell.errors import ConfigError


def parse_role_arn(arn: str) -> dict:
    """Split an IAM role ARN into its account ID and role name.

    The role name is the last '/' segment, so path-qualified roles
    (arn:aws:iam::123456789012:role/ops/Deployer) resolve to 'Deployer'.
    """
    parts = arn.split(":")
    if len(parts) < 5 or "/" not in arn:
        raise ConfigError(
            f"Invalid role ARN: {arn}\n"
            "  Expected: arn:aws:iam::<account>:role/<name>"
        )
    return {
        "account": parts[4],
        "name": arn.split("/")[-1],
    }


def default_config_path(environ=os.environ) -> str:
    """Location of the AWS config file: $AWS_CONFIG_FILE, else $HOME/.aws/config."""
    override = environ.get("AWS_CONFIG_FILE")
    if override:
        return os.path.expanduser(override)
    home = environ.get("HOME") or str(Path.home())
    return os.path.join(home, ".aws", "config")
