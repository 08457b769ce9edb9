import logging
import pprint

import click

from dockercreds import deploy
from dockercreds.docker_registries import registries_from_config
from dockercreds.installer import OperatingSystemType, docker_registries_install_commands
from dockercreds.schemas import DOCKERCREDS_BASE_SCHEMA
from dockercreds.util import get_full_yaml_filename, load_yaml


def load_config() -> dict:
    return DOCKERCREDS_BASE_SCHEMA(load_yaml(get_full_yaml_filename("config")))


@click.group()
@click.option("--verbose", is_flag=True, default=False)
def main(verbose):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)


@main.command("deploy")
def run_deploy():
    """Runs all steps in `.dockercreds/deployment.yml`"""
    deploy.main()


@main.command()
@click.option(
    "--os",
    "os_type",
    type=click.Choice([_.value for _ in OperatingSystemType]),
    default=OperatingSystemType.LINUX.value,
)
def commands(os_type):
    """Prints the commands installing the configured registry credentials"""
    registries = registries_from_config(load_config())
    for command in docker_registries_install_commands(registries, OperatingSystemType(os_type)):
        click.echo(command)


@main.command()
def show():
    click.echo(click.style("Current configuration", fg="green"))
    click.echo(pprint.pformat(load_config()))


if __name__ == "__main__":
    main()
