"""
SSM Parameter Store Tools

Reads runtime parameters (API credentials, notification addresses) stored as
<path>/<name> entries, e.g. /shiftboard/api/email.
"""

import boto3
from botocore.exceptions import ClientError
import structlog

from shiftbot.config import Settings
from shiftbot.exceptions import ConfigurationError, ParameterStoreError

log = structlog.get_logger()


def _get_client(settings: Settings):
    """Get SSM client."""
    return boto3.client("ssm", **settings.client_config)


def get_parameters_by_path(
    path: str,
    settings: Settings,
    *,
    with_decryption: bool = False,
    client=None,
) -> dict[str, str]:
    """
    Read all parameters directly under a path.

    Args:
        path: Parameter path, e.g. "/shiftboard/api"
        settings: Application settings
        with_decryption: Decrypt SecureString values
        client: Optional SSM client

    Returns:
        Mapping of the last path segment to the parameter value

    Raises:
        ParameterStoreError: On SSM operation failure
    """
    ssm = client or _get_client(settings)
    request: dict[str, object] = {"Path": path, "WithDecryption": with_decryption}
    parameters: dict[str, str] = {}

    try:
        while True:
            response = ssm.get_parameters_by_path(**request)
            for parameter in response.get("Parameters", []):
                key = parameter["Name"].rstrip("/").rsplit("/", 1)[-1]
                parameters[key] = parameter.get("Value", "")
            next_token = response.get("NextToken")
            if not next_token:
                break
            request["NextToken"] = next_token
    except ClientError as e:
        log.error("ssm_read_failed", path=path, error=str(e))
        raise ParameterStoreError(path=path, error_message=str(e)) from e

    # Names only; values may be credentials
    log.info("ssm_parameters_loaded", path=path, names=sorted(parameters))
    return parameters


def require_parameter(parameters: dict[str, str], name: str, path: str) -> str:
    """
    Return a non-empty parameter value.

    Raises:
        ConfigurationError: If the parameter is missing or blank
    """
    value = parameters.get(name, "").strip()
    if not value:
        raise ConfigurationError(parameter=name, path=path)
    return value
