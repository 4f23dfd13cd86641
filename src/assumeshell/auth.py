import logging
from dataclasses import dataclass

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from assumeshell.errors import RemoteServiceError
from assumeshell.resolver import ResolvedSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    access_key_id: str
    secret_access_key: str
    session_token: str

    def __repr__(self) -> str:
        return "Credentials(access_key_id='****', secret_access_key='****', session_token='****')"


def _describe(e: Exception) -> str:
    if isinstance(e, ClientError):
        code = e.response["Error"]["Code"]
        msg = e.response["Error"]["Message"]
        return f"{code}: {msg}"
    return str(e)


def get_session_name(sts, profile: str | None) -> str:
    """Derive the role session name from the caller's STS UserId.

    For an assumed-role or federated caller the UserId looks like
    ``AROAEXAMPLE:jane.doe``; the part after the colon becomes the session name.
    """
    try:
        identity = sts.get_caller_identity()
    except (ClientError, BotoCoreError) as e:
        raise RemoteServiceError("GetCallerIdentity", profile, _describe(e))

    parts = identity.get("UserId", "").split(":")
    if len(parts) < 2 or not parts[1]:
        raise RemoteServiceError(
            "GetCallerIdentity", profile,
            f"cannot derive a session name from caller id '{identity.get('UserId', '')}'",
        )
    return parts[1]


def assume_role(resolved: ResolvedSession, session_factory=None) -> Credentials | None:
    """Assume the resolved profile's role and return temporary credentials.

    Returns None without touching AWS when the profile has no role or
    assumption was disabled. The session is scoped to the profile, so
    botocore prompts for an MFA code on stdin when the profile requires one.
    """
    if not resolved.role_arn or resolved.assume_disabled:
        return None

    profile = resolved.profile_name
    try:
        session = (session_factory or boto3.Session)(profile_name=profile, region_name=resolved.region)
        sts = session.client("sts")
    except BotoCoreError as e:
        raise RemoteServiceError("CreateSession", profile, _describe(e))

    session_name = get_session_name(sts, profile)
    logger.debug("Assuming %s as session %s", resolved.role_arn, session_name)

    try:
        response = sts.assume_role(
            RoleArn=resolved.role_arn,
            RoleSessionName=session_name,
        )
    except (ClientError, BotoCoreError) as e:
        raise RemoteServiceError(f"AssumeRole {resolved.role_arn}", profile, _describe(e))

    creds = response["Credentials"]
    return Credentials(
        access_key_id=creds["AccessKeyId"],
        secret_access_key=creds["SecretAccessKey"],
        session_token=creds["SessionToken"],
    )
