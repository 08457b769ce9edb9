import json
import logging
import shlex
from enum import Enum, unique
from typing import Dict, List, Optional, Sequence

from dockercreds.registry import DockerRegistry

logger = logging.getLogger(__name__)

CREDENTIALS_CONFIG_VERSION = "1.0"
CREDENTIALS_DIRECTORY = ".cdk"
CREDENTIALS_FILENAME = "cdk-docker-creds.json"

PACKAGE_FEED_LOGIN = "aws codeartifact login --tool npm --domain cdk1 --repository CDKPackageInjector"


@unique
class OperatingSystemType(Enum):
    LINUX = "linux"
    WINDOWS = "windows"


def render_credentials_config(registries: Sequence[DockerRegistry]) -> dict:
    """Renders the credentials configuration read by the asset publishing tool

    Registries sharing a domain overwrite each other, the last one wins.

    Args:
        registries: The registries to render, in order

    Returns:
        The configuration, with the credential source of each registry keyed on its domain
    """
    domain_credentials: Dict[str, dict] = {}
    for registry in registries:
        if registry.registry_domain in domain_credentials:
            logger.debug(f"Overwriting credentials for duplicate registry domain {registry.registry_domain}")
        domain_credentials[registry.registry_domain] = registry.render_credential_source().to_dict()
    return {"version": CREDENTIALS_CONFIG_VERSION, "domainCredentials": domain_credentials}


def docker_registries_install_commands(
    registries: Optional[Sequence[DockerRegistry]] = None, os_type: Optional[OperatingSystemType] = None
) -> List[str]:
    """Shell commands that install the registry credentials configuration on a build machine

    Nothing is executed here, the commands are meant to be run by the build machine before
    it runs any docker command. Without registries no commands are returned, so no
    credentials file is written at all.

    Args:
        registries: The registries the build machine needs access to
        os_type: The operating system of the build machine. Anything but windows is
            treated as a POSIX shell.

    Returns:
        The commands to run, in order
    """
    if not registries:
        return []

    config = json.dumps(render_credentials_config(registries), separators=(",", ":"))

    if os_type == OperatingSystemType.WINDOWS:
        directory = f"%USERPROFILE%\\{CREDENTIALS_DIRECTORY}"
        return [
            PACKAGE_FEED_LOGIN,
            f"if not exist {directory} mkdir {directory}",
            f"echo '{config}' > {directory}\\{CREDENTIALS_FILENAME}",
        ]
    else:
        directory = f"$HOME/{CREDENTIALS_DIRECTORY}"
        return [
            PACKAGE_FEED_LOGIN,
            f"mkdir -p {directory}",
            f"echo {shlex.quote(config)} > {directory}/{CREDENTIALS_FILENAME}",
        ]
