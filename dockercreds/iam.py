import abc
import logging
from dataclasses import dataclass
from typing import List, Tuple

logger = logging.getLogger(__name__)

POLICY_VERSION = "2012-10-17"


@dataclass(frozen=True)
class PolicyStatement(object):
    actions: Tuple[str, ...]
    resources: Tuple[str, ...]
    effect: str = "Allow"

    def to_dict(self) -> dict:
        return {"Effect": self.effect, "Action": list(self.actions), "Resource": list(self.resources)}


class Grantable(abc.ABC):
    """Anything that can be handed permissions.

    Grants are never attached to the grantable itself but to its `grant_principal`, which
    for most implementations is the object itself.
    """

    @property
    @abc.abstractmethod
    def grant_principal(self) -> "Principal":
        raise NotImplementedError


class Principal(Grantable):
    """An identity that accumulates policy statements.

    Statements are only ever appended, calling a grant twice simply adds the statement twice.
    """

    def __init__(self, arn: str):
        self.arn = arn
        self._statements: List[PolicyStatement] = []

    @property
    def grant_principal(self) -> "Principal":
        return self

    def add_to_principal_policy(self, statement: PolicyStatement) -> None:
        logger.debug(f"Adding {statement.actions} on {statement.resources} to {self.arn}")
        self._statements.append(statement)

    @property
    def statements(self) -> Tuple[PolicyStatement, ...]:
        return tuple(self._statements)

    def policy_document(self) -> dict:
        """Renders all statements as an IAM policy document

        Returns:
            A dictionary that can be serialized to an IAM policy JSON document
        """
        return {"Version": POLICY_VERSION, "Statement": [_.to_dict() for _ in self._statements]}

    def __repr__(self):
        return f"{self.__class__.__name__}({self.arn!r})"


class Role(Principal):
    """A principal that can be assumed by other principals using `sts:AssumeRole`"""
