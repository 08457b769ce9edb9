from dockercreds.credentials.repository import Repository
from dockercreds.credentials.secret import Secret

SECRET_ARN = "arn:aws:secretsmanager:eu-west-1:123456789012:secret:dockerhub-AbCdEf"
OTHER_SECRET_ARN = "arn:aws:secretsmanager:eu-west-1:123456789012:secret:custom-GhIjKl"
ASSUME_ROLE_ARN = "arn:aws:iam::123456789012:role/registry-access"
GRANTEE_ROLE_ARN = "arn:aws:iam::123456789012:role/build"

ECR_DOMAIN = "123456789012.dkr.ecr.eu-west-1.amazonaws.com"
ECR_URI = f"{ECR_DOMAIN}/my-app:latest"
OTHER_ECR_URI = f"{ECR_DOMAIN}/team/other-app"

SECRET = Secret(SECRET_ARN)
REPOSITORY = Repository(ECR_URI, "arn:aws:ecr:eu-west-1:123456789012:repository/my-app")
OTHER_REPOSITORY = Repository(OTHER_ECR_URI, "arn:aws:ecr:eu-west-1:123456789012:repository/team/other-app")


def dockercreds_config(**kwargs) -> dict:
    return {"docker_registries": [{"type": "dockerhub", "secret_arn": SECRET_ARN}], **kwargs}
