import json
import logging
import os
from typing import Pattern

import jinja2
from yaml import safe_load

logger = logging.getLogger(__name__)

CONFIG_DIRECTORY = ".dockercreds"


def render_string_with_jinja(template: str, params: dict) -> str:
    """Render a jinja template

    Args:
        template: the jinja template as a string
        params: the values to fill into the jinja template

    Returns:
        str: rendered jinja template as a string
    """
    return jinja2.Template(template, keep_trailing_newline=True).render(**params)


def get_matching_group(find_in: str, pattern: Pattern[str], group: int):
    match = pattern.search(find_in)

    if not match:
        raise ValueError("Couldn't find a match")

    found_groups = len(match.groups())
    if found_groups <= group:
        raise IndexError(f"Couldn't find that many groups, the number of groups found is: {found_groups}")
    return match.groups()[group]


def load_yaml(path: str) -> dict:
    with open(path, "r") as f:
        config_file = f.read()
    return safe_load(config_file) or {}


def write_json(path: str, content: dict):
    with open(path, "w") as f:
        json.dump(content, f, indent=2)


def write_file(path: str, content: str):
    with open(path, "w") as f:
        f.write(content)


def get_full_yaml_filename(filename: str) -> str:
    extensions = (".yaml", ".yml")
    for ext in extensions:
        concat_filename = os.path.join(CONFIG_DIRECTORY, f"{filename}{ext}")
        if os.path.isfile(concat_filename):
            return concat_filename
        else:
            logger.info(f"Could not find file: {concat_filename}")
    raise FileNotFoundError(f"Could not find any valid file for base_filename: {filename}")
