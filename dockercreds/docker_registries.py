"""
Example:

    In `.dockercreds/config.yml`::

        docker_registries:
          - type: dockerhub
            secret_arn: arn:aws:secretsmanager:eu-west-1:123456789012:secret:dockerhub
          - type: ecr
            repositories:
              - 123456789012.dkr.ecr.eu-west-1.amazonaws.com/my-app
            assume_role_arn: arn:aws:iam::123456789012:role/ecr-pull

Registries are created in the order they are configured.
"""
import logging
from typing import List, Optional, Tuple

from dockercreds.credentials.repository import Repository
from dockercreds.credentials.secret import Secret
from dockercreds.iam import Role
from dockercreds.registry import (
    DockerRegistry,
    DockerRegistryUsage,
    EcrDockerRegistryOptions,
    ExternalDockerRegistryOptions,
)

logger = logging.getLogger(__name__)


def _usages(registry_config: dict) -> Optional[Tuple[DockerRegistryUsage, ...]]:
    usages = registry_config.get("usages")
    if not usages:
        return None
    return tuple(DockerRegistryUsage[_.upper()] for _ in usages)


def _assume_role(registry_config: dict) -> Optional[Role]:
    arn = registry_config.get("assume_role_arn")
    return Role(arn) if arn else None


def registry_from_config(registry_config: dict) -> DockerRegistry:
    """Creates a single registry from its validated configuration

    Args:
        registry_config: One entry of `docker_registries`

    Returns:
        The registry

    Raises:
        ValueError when the registry type is unknown
    """
    registry_type = registry_config["type"]
    if registry_type == "ecr":
        return DockerRegistry.from_ecr(
            [Repository.from_uri(_) for _ in registry_config["repositories"]],
            EcrDockerRegistryOptions(assume_role=_assume_role(registry_config), usages=_usages(registry_config)),
        )

    opts = ExternalDockerRegistryOptions(
        secret=Secret(registry_config["secret_arn"]),
        secret_username_field=registry_config.get("secret_username_field"),
        secret_password_field=registry_config.get("secret_password_field"),
        assume_role=_assume_role(registry_config),
        usages=_usages(registry_config),
    )
    if registry_type == "dockerhub":
        return DockerRegistry.from_docker_hub(opts)
    elif registry_type == "custom":
        return DockerRegistry.from_custom_registry(registry_config["domain"], opts)
    raise ValueError(f"Docker registry type {registry_type} is not supported")


def registries_from_config(config: dict) -> List[DockerRegistry]:
    registries = [registry_from_config(_) for _ in config.get("docker_registries", [])]
    logger.info(f"Found docker registries {[_.registry_domain for _ in registries]}")
    return registries
