"""Base class for the steps listed in `.dockercreds/deployment.yml`.

A step receives the task configuration merged with `.dockercreds/config.yml`, so every step
schema extends `DOCKERCREDS_BASE_SCHEMA` to validate the configured `docker_registries`.
"""
import abc
import logging
import pprint

import voluptuous as vol

logger = logging.getLogger(__name__)


class Step(object):
    """Base class for any Dockercreds step

    Inheriting from this class will allow the user to create a new Step that will validate the schema
    and expose the `run` function. After inheriting this, add the new class to `steps.py`. This will
    enable Dockercreds to pick it up from the `.dockercreds/deployment.yml`.
    """

    def __init__(self, config: dict):
        self.config = self.validate(config)

    @abc.abstractmethod
    def run(self):
        """The entrypoint to any step. Should contain the main logic for any Dockercreds step"""
        raise NotImplementedError

    def validate(self, config: dict) -> dict:
        """Validates a given voluptuous schema

        Args:
            config: Dockercreds configuration

        Returns:
            The validated schema

        Raises:
            MultipleInvalid
            Invalid
        """
        logger.debug(f"Validating configuration of {self.__class__.__name__}")
        try:
            return self.schema()(config)
        except (vol.MultipleInvalid, vol.Invalid) as e:
            logger.error(e)
            logger.error(pprint.pformat(config))
            raise e

    @abc.abstractmethod
    def schema(self) -> vol.Schema:
        raise NotImplementedError
