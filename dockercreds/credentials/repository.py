import re
from dataclasses import dataclass

from dockercreds.iam import Grantable, PolicyStatement
from dockercreds.util import get_matching_group

ECR_URI_PATTERN = re.compile(r"^([0-9]{12})\.dkr\.ecr\.([a-z0-9-]+)\.amazonaws\.com/([^:@]+)")

PULL_ACTIONS = ("ecr:BatchCheckLayerAvailability", "ecr:GetDownloadUrlForLayer", "ecr:BatchGetImage")
AUTHORIZATION_ACTIONS = ("ecr:GetAuthorizationToken",)


@dataclass(frozen=True)
class Repository(object):
    """Reference to an ECR repository.

    The uri has the form `<registry domain>/<repository name>[:tag]`, for example
    `123456789012.dkr.ecr.eu-west-1.amazonaws.com/my-app:latest`.
    """

    uri: str
    arn: str

    @classmethod
    def from_uri(cls, uri: str) -> "Repository":
        """Creates a repository reference, deriving the ARN from the repository uri

        Args:
            uri: An ECR repository uri, optionally with a tag

        Returns:
            The repository reference

        Raises:
            ValueError when the uri does not point to an ECR repository
        """
        try:
            account = get_matching_group(uri, ECR_URI_PATTERN, 0)
            region = get_matching_group(uri, ECR_URI_PATTERN, 1)
            name = get_matching_group(uri, ECR_URI_PATTERN, 2)
        except ValueError:
            raise ValueError(f"Not an ECR repository uri: {uri}")
        return cls(uri, f"arn:aws:ecr:{region}:{account}:repository/{name}")

    @property
    def registry_domain(self) -> str:
        return self.uri.split("/")[0]

    def grant_pull(self, grantee: Grantable) -> None:
        principal = grantee.grant_principal
        principal.add_to_principal_policy(PolicyStatement(PULL_ACTIONS, (self.arn,)))
        # authorization tokens are account wide and cannot be scoped to a repository
        principal.add_to_principal_policy(PolicyStatement(AUTHORIZATION_ACTIONS, ("*",)))
