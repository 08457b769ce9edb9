"""Docker registries used by a deployment pipeline.

A registry knows two things: how to authorize a principal to fetch its credentials (or
images) and how to describe itself as a credential source for the asset publishing tool
running on the build machine. Use one of the factories on `DockerRegistry` to create one::

    DockerRegistry.from_docker_hub(ExternalDockerRegistryOptions(secret=Secret(arn)))
    DockerRegistry.from_custom_registry("registry.example.com", ExternalDockerRegistryOptions(...))
    DockerRegistry.from_ecr([Repository.from_uri(uri)])
"""
import abc
import logging
from dataclasses import asdict, dataclass
from enum import Enum, auto, unique
from typing import Collection, List, Optional, Sequence

from dockercreds.credentials.repository import Repository
from dockercreds.credentials.secret import Secret
from dockercreds.iam import Grantable, PolicyStatement, Role

logger = logging.getLogger(__name__)

DOCKER_HUB_DOMAIN = "index.docker.io"


@unique
class DockerRegistryUsage(Enum):
    """Pipeline phases that may need access to a registry"""

    SYNTH = auto()
    SELF_UPDATE = auto()
    ASSET_PUBLISHING = auto()


@dataclass(frozen=True)
class ExternalDockerRegistryOptions(object):
    secret: Secret
    secret_username_field: Optional[str] = None
    secret_password_field: Optional[str] = None
    assume_role: Optional[Role] = None
    # Not used for rendering, all registries are installed for every phase
    usages: Optional[Collection[DockerRegistryUsage]] = None


@dataclass(frozen=True)
class EcrDockerRegistryOptions(object):
    assume_role: Optional[Role] = None
    usages: Optional[Collection[DockerRegistryUsage]] = None


@dataclass(frozen=True)
class DockerRegistryCredentialSource(object):
    """Where the asset publishing tool can find credentials for a single registry domain.

    Either the secret fields are set or `ecrRepository` is, never both.
    """

    secretsManagerSecretId: Optional[str] = None
    secretsUsernameField: Optional[str] = None
    secretsPasswordField: Optional[str] = None
    ecrRepository: Optional[bool] = None
    assumeRoleArn: Optional[str] = None

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}


class DockerRegistry(abc.ABC):
    @staticmethod
    def from_docker_hub(opts: ExternalDockerRegistryOptions) -> "DockerRegistry":
        """Docker Hub, authenticated with the username and password stored in a secret"""
        return ExternalDockerRegistry(DOCKER_HUB_DOMAIN, opts)

    @staticmethod
    def from_custom_registry(registry_domain: str, opts: ExternalDockerRegistryOptions) -> "DockerRegistry":
        """Any registry reachable on `registry_domain`, authenticated with a secret"""
        if not registry_domain:
            raise ValueError("A custom docker registry needs a non-empty domain")
        return ExternalDockerRegistry(registry_domain, opts)

    @staticmethod
    def from_ecr(
        repositories: Sequence[Repository], opts: Optional[EcrDockerRegistryOptions] = None
    ) -> "DockerRegistry":
        """One or more ECR repositories, authenticated with the identity of the build machine.

        All repositories must live in the same registry; the domain of the first repository is
        used for all of them.

        Raises:
            ValueError when no repositories are given
        """
        return EcrDockerRegistry(repositories, opts or EcrDockerRegistryOptions())

    @property
    @abc.abstractmethod
    def registry_domain(self) -> str:
        raise NotImplementedError

    @property
    def assume_role(self) -> Optional[Role]:
        """The role assumed before fetching credentials or images, if any"""
        return self._opts.assume_role

    @abc.abstractmethod
    def grant_read(self, grantee: Grantable) -> None:
        """Allows `grantee` to fetch the credentials for, or images from, this registry"""
        raise NotImplementedError

    @abc.abstractmethod
    def render_credential_source(self) -> DockerRegistryCredentialSource:
        raise NotImplementedError

    @staticmethod
    def _grant_assume_role(grantee: Grantable, assume_role: Optional[Role]) -> Grantable:
        """Lets `grantee` assume `assume_role`, if any.

        Returns:
            The principal that needs access to the registry: the assumed role when given,
            `grantee` otherwise
        """
        if not assume_role:
            return grantee
        grantee.grant_principal.add_to_principal_policy(PolicyStatement(("sts:AssumeRole",), (assume_role.arn,)))
        return assume_role

    def __repr__(self):
        return f"{self.__class__.__name__}({self.registry_domain!r})"


class ExternalDockerRegistry(DockerRegistry):
    def __init__(self, registry_domain: str, opts: ExternalDockerRegistryOptions):
        self._registry_domain = registry_domain
        self._opts = opts

    @property
    def registry_domain(self) -> str:
        return self._registry_domain

    def grant_read(self, grantee: Grantable) -> None:
        principal = self._grant_assume_role(grantee, self.assume_role)
        self._opts.secret.grant_read(principal)

    def render_credential_source(self) -> DockerRegistryCredentialSource:
        return DockerRegistryCredentialSource(
            secretsManagerSecretId=self._opts.secret.arn,
            secretsUsernameField=self._opts.secret_username_field,
            secretsPasswordField=self._opts.secret_password_field,
            assumeRoleArn=self.assume_role.arn if self.assume_role else None,
        )


class EcrDockerRegistry(DockerRegistry):
    def __init__(self, repositories: Sequence[Repository], opts: EcrDockerRegistryOptions):
        if len(repositories) == 0:
            raise ValueError("Must supply at least one repository to create an EcrDockerRegistry")
        self._repositories: List[Repository] = list(repositories)
        self._opts = opts
        self._registry_domain = self._repositories[0].registry_domain

    @property
    def registry_domain(self) -> str:
        return self._registry_domain

    def grant_read(self, grantee: Grantable) -> None:
        principal = self._grant_assume_role(grantee, self.assume_role)
        for repository in self._repositories:
            repository.grant_pull(principal)

    def render_credential_source(self) -> DockerRegistryCredentialSource:
        return DockerRegistryCredentialSource(
            ecrRepository=True, assumeRoleArn=self.assume_role.arn if self.assume_role else None
        )
