from dataclasses import dataclass

from dockercreds.iam import Grantable, PolicyStatement

SECRET_READ_ACTIONS = ("secretsmanager:GetSecretValue", "secretsmanager:DescribeSecret")


@dataclass(frozen=True)
class Secret(object):
    """Reference to a secret in AWS Secrets Manager.

    The secret value itself is never read, only its ARN is passed on to whoever
    needs to fetch it at build time.
    """

    arn: str

    def grant_read(self, grantee: Grantable) -> None:
        grantee.grant_principal.add_to_principal_policy(PolicyStatement(SECRET_READ_ACTIONS, (self.arn,)))

    def __repr__(self):
        return "Secret: '%s'" % self.arn
