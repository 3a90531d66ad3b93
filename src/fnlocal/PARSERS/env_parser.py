# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Parsers for environment files referenced by `environment_file:`.
"""
import io
import os
from typing import Dict, Iterable
import yaml
from dotenv.parser import parse_stream
from ..MODELS.function_definition import scalar_to_str
from ..errors import EnvironmentFileError

YAML_SUFFIXES = ('.yml', '.yaml')


class EnvParser:
    """
    Reads KEY=VALUE pairs from environment files.

    Files ending in .yml or .yaml hold an `environment:` mapping; any other
    file is read as dotenv-style KEY=VALUE lines.
    """
    @staticmethod
    def parse(env_path: str) -> Dict[str, str]:
        """
        Parses an environment file from a path.

        Args:
            env_path (str): Path to the environment file.

        Returns:
            Dict[str, str]: Variables in file order.

        Raises:
            EnvironmentFileError: If the file is missing or malformed.
        """
        if not os.path.isfile(env_path):
            raise EnvironmentFileError(env_path, "no such file")
        try:
            with open(env_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise EnvironmentFileError(env_path, e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise EnvironmentFileError(env_path, f"not valid UTF-8: {e.reason} at byte {e.start}") from e

        if env_path.endswith(YAML_SUFFIXES):
            return EnvParser.parse_yaml(content, source=env_path)
        return EnvParser.parse_from_string(content, source=env_path)

    @staticmethod
    def parse_files(env_paths: Iterable[str]) -> Dict[str, str]:
        """
        Merges several environment files, later files overriding earlier keys.
        """
        merged: Dict[str, str] = {}
        for env_path in env_paths:
            merged.update(EnvParser.parse(env_path))
        return merged

    @staticmethod
    def parse_from_string(content: str, source: str = "<string>") -> Dict[str, str]:
        """
        Parses dotenv-style variables from a string.
        Handles quotes, comments, `export` prefixes and escaped characters.
        """
        env = {}
        for binding in parse_stream(io.StringIO(content)):
            if binding.error:
                raise EnvironmentFileError(
                    source, f"line {binding.original.line}: can't parse {binding.original.string.strip()!r}")
            if binding.key is None:
                # blank line or comment
                continue
            env[binding.key] = binding.value if binding.value is not None else ""
        return env

    @staticmethod
    def parse_yaml(content: str, source: str = "<string>") -> Dict[str, str]:
        """
        Parses an `environment:` mapping from YAML content.
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise EnvironmentFileError(source, f"invalid YAML: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise EnvironmentFileError(source, "expected a mapping with an `environment` key")

        environment = data.get('environment') or {}
        if not isinstance(environment, dict):
            raise EnvironmentFileError(source, "`environment` must be a mapping")
        return {str(k): scalar_to_str(v) for k, v in environment.items()}
