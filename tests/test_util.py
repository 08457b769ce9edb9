import json
import os
import re

import pytest

from dockercreds import util as victim


class TestPatternMatching(object):
    pattern = re.compile("(^foo)-([0-9]{1,3})-snapshot$")
    test_strings = [
        "foo-031-snapshot",
        "foo-12-snapshot",
        "foo-1234-snapshot",
        "foobar-309-snapshot",
        "foo-20-snap",
    ]

    def test_get_matching_group(self):
        values = [(1, "031"), (0, "foo")]
        for string, (idx, value) in zip(self.test_strings[:2], values):
            assert victim.get_matching_group(string, self.pattern, idx) == value

    def test_get_matches_no_group_found(self):
        values = [(1, "031"), (0, "foo"), (3, "snap")]
        for string, (idx, value) in zip(self.test_strings[2:], values):
            with pytest.raises(ValueError):
                assert victim.get_matching_group(string, self.pattern, idx) == value

    def test_get_matching_group_not_enough_groups(self):
        values = [(3, "031"), (7, "foo")]
        for string, (idx, value) in zip(self.test_strings[:2], values):
            with pytest.raises(IndexError):
                assert victim.get_matching_group(string, self.pattern, idx) == value

    def test_get_matching_group_one_past_last_group(self):
        with pytest.raises(IndexError, match="number of groups found is: 2"):
            victim.get_matching_group(self.test_strings[0], self.pattern, 2)


class TestYamlFiles(object):
    @pytest.fixture(autouse=True)
    def in_tmp_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        os.mkdir(".dockercreds")

    def test_get_full_yaml_filename_file_exists(self):
        with open(os.path.join(".dockercreds", "deployment.yml"), "w") as f:
            f.write("steps: []\n")
        result = victim.get_full_yaml_filename("deployment")
        assert result == os.path.join(".dockercreds", "deployment.yml")

    def test_get_full_yaml_filename_prefers_yaml(self):
        for ext in ("yml", "yaml"):
            with open(os.path.join(".dockercreds", f"config.{ext}"), "w") as f:
                f.write("{}\n")
        assert victim.get_full_yaml_filename("config") == os.path.join(".dockercreds", "config.yaml")

    def test_get_full_yaml_filename_file_not_exists(self):
        with pytest.raises(FileNotFoundError):
            victim.get_full_yaml_filename("my_stupid_file")

    def test_load_yaml(self):
        path = os.path.join(".dockercreds", "config.yml")
        with open(path, "w") as f:
            f.write("docker_registries:\n  - type: dockerhub\n    secret_arn: arn\n")
        assert victim.load_yaml(path) == {"docker_registries": [{"type": "dockerhub", "secret_arn": "arn"}]}

    def test_load_empty_yaml(self):
        path = os.path.join(".dockercreds", "config.yml")
        open(path, "w").close()
        assert victim.load_yaml(path) == {}

    def test_write_json(self):
        victim.write_json("out.json", {"Version": "2012-10-17"})
        with open("out.json") as f:
            assert json.load(f) == {"Version": "2012-10-17"}

    def test_write_file(self):
        victim.write_file("out.sh", "echo hi\n")
        with open("out.sh") as f:
            assert f.read() == "echo hi\n"


def test_render_string_with_jinja():
    assert victim.render_string_with_jinja("{{ a }}-{{ b }}\n", {"a": "x", "b": "y"}) == "x-y\n"
