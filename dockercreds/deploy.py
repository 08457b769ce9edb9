"""
Example:

    `.dockercreds/deployment.yml`::

        steps:
          - task: install_docker_credentials
            os_type: windows

Each step gets its own task configuration merged with `.dockercreds/config.yml`, so all steps
see the same `docker_registries`.
"""
import logging

from dockercreds.util import get_full_yaml_filename, load_yaml

logger = logging.getLogger(__name__)


def main():
    deployment_file = get_full_yaml_filename("deployment")
    config_file = get_full_yaml_filename("config")
    deployment = load_yaml(deployment_file)
    config = load_yaml(config_file)

    tasks = [_["task"] for _ in deployment.get("steps", [])]
    logger.info(f"Running {tasks} from {deployment_file} with registries configured in {config_file}")

    for task_config in deployment.get("steps", []):
        task = task_config["task"]
        logger.info("*" * 76)
        logger.info("{:10s} {:13s} {:40s} {:10s}".format("*" * 10, "RUNNING TASK:", task, "*" * 10))
        logger.info("*" * 76)
        run_task(task, {**task_config, **config})


def run_task(task: str, task_config: dict):
    """Runs a single step

    Raises:
        ValueError when no step is registered for `task` in `dockercreds.steps`
    """
    from dockercreds.steps import steps

    if task not in steps:
        raise ValueError(f"Deployment step {task} is unknown, please check the config")
    return steps[task](task_config).run()  # type: ignore
