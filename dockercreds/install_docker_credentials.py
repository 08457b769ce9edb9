import logging
from typing import Dict, List

import voluptuous as vol

from dockercreds.docker_registries import registries_from_config
from dockercreds.iam import POLICY_VERSION, Role
from dockercreds.installer import OperatingSystemType, docker_registries_install_commands
from dockercreds.registry import DockerRegistry
from dockercreds.schemas import DOCKERCREDS_BASE_SCHEMA
from dockercreds.step import Step
from dockercreds.util import render_string_with_jinja, write_file, write_json

logger = logging.getLogger(__name__)

SCRIPT_TEMPLATES = {
    OperatingSystemType.LINUX: """#!/usr/bin/env sh
set -e
{% for command in commands -%}
{{ command }}
{% endfor %}""",
    OperatingSystemType.WINDOWS: """@echo off
{% for command in commands -%}
{{ command }}
{% endfor %}""",
}

DEFAULT_SCRIPT_FILES = {
    OperatingSystemType.LINUX: "install_docker_credentials.sh",
    OperatingSystemType.WINDOWS: "install_docker_credentials.bat",
}

SCHEMA = DOCKERCREDS_BASE_SCHEMA.extend(
    {
        vol.Required("task"): "install_docker_credentials",
        vol.Optional("os_type", default="linux", description="Operating system of the build machine"): vol.All(
            str, vol.In([_.value for _ in OperatingSystemType])
        ),
        vol.Optional(
            "script_file",
            default=None,
            description="Where to write the install script. Defaults to a file named after the operating system",
        ): vol.Any(None, str),
        vol.Optional(
            "grantee_role_arn",
            default=None,
            description="The role running the build. When given, a policy granting it read access is written",
        ): vol.Any(None, str),
        vol.Optional("policy_file", default="docker_registries_policy.json"): str,
    },
    extra=vol.ALLOW_EXTRA,
)


class InstallDockerCredentials(Step):
    """Writes a script that installs the docker registry credentials on a build machine.

    Depends on:
    - The registries configured under `docker_registries`
    - The aws-cli must be available on the build machine running the script
    """

    def __init__(self, config: dict):
        super().__init__(config)
        self.os_type = OperatingSystemType(self.config["os_type"])

    def schema(self) -> vol.Schema:
        return SCHEMA

    @property
    def script_file(self) -> str:
        return self.config["script_file"] or DEFAULT_SCRIPT_FILES[self.os_type]

    def render_script(self, commands: List[str]) -> str:
        return render_string_with_jinja(SCRIPT_TEMPLATES[self.os_type], {"commands": commands})

    def policy_documents(self, registries: List[DockerRegistry]) -> Dict[str, dict]:
        """Grants the build role read access to all registries

        Registries with an assumed role give the build role `sts:AssumeRole` only, the actual
        access lands on the assumed role. Registries sharing an assumed role ARN share a document.

        Args:
            registries: The registries the build role needs access to

        Returns:
            The policy document of the build role and of every assumed role, keyed on role ARN
        """
        grantee = Role(self.config["grantee_role_arn"])
        for registry in registries:
            registry.grant_read(grantee)

        documents = {grantee.arn: grantee.policy_document()}
        assumed_roles = {id(_.assume_role): _.assume_role for _ in registries if _.assume_role}
        for role in assumed_roles.values():
            statements = documents.setdefault(role.arn, {"Version": POLICY_VERSION, "Statement": []})["Statement"]
            statements.extend(role.policy_document()["Statement"])
        return documents

    def write_policy(self, registries: List[DockerRegistry]):
        documents = self.policy_documents(registries)
        logger.info(f"Writing docker registry policies for {list(documents)} to {self.config['policy_file']}")
        write_json(self.config["policy_file"], documents)

    def run(self):
        registries = registries_from_config(self.config)
        commands = docker_registries_install_commands(registries, self.os_type)
        if not commands:
            logger.info("No docker registries configured, not writing an install script")
            return

        logger.info(f"Writing docker credentials install script to {self.script_file}")
        write_file(self.script_file, self.render_script(commands))

        if self.config["grantee_role_arn"]:
            self.write_policy(registries)
