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
Parsers for stack YAML files.
"""
import fnmatch
import logging
import os
from typing import Any, Dict, Mapping, Optional
import yaml
from pydantic import ValidationError
from ..MODELS.stack_definition import StackDefinition
from ..MODELS.function_definition import FunctionDefinition
from ..UTILS.string_interpolation import EnvironmentInterpolator
from ..errors import StackFileError

logger = logging.getLogger(__name__)


class StackParser:
    """
    Parser for stack.yml files.
    """
    def __init__(self, context: Optional[Mapping[str, str]] = None, envsubst: bool = True):
        """
        Initializes the parser with an optional environment context for interpolation.

        :param context: A mapping of environment variables for interpolation.
        :param envsubst: Whether to substitute ${VAR} placeholders at all.
        """
        self.context = dict(os.environ) if context is None else dict(context)
        self.envsubst = envsubst

    def parse(self, stack_path: str, name_filter: Optional[str] = None) -> StackDefinition:
        """
        Parses a stack file from a path.

        :param stack_path: Path to the stack file.
        :param name_filter: Shell-style wildcard; only matching functions are kept.
        :return: Parsed stack.
        """
        try:
            with open(stack_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError as e:
            raise StackFileError(f"stack file not found: {stack_path}") from e
        except OSError as e:
            raise StackFileError(f"can't read stack file {stack_path}: {e}") from e
        except UnicodeDecodeError as e:
            raise StackFileError(f"stack file {stack_path} is not valid UTF-8: {e.reason} at byte {e.start}") from e
        return self.parse_from_string(content, name_filter=name_filter, source=stack_path)

    def parse_from_string(self,
                          content: str,
                          name_filter: Optional[str] = None,
                          source: str = "<string>") -> StackDefinition:
        """
        Parses a stack file from a string.

        :param content: YAML content of the stack file.
        :param name_filter: Shell-style wildcard; only matching functions are kept.
        :param source: Name used in error messages.
        :return: Parsed stack.
        """
        if self.envsubst:
            content = EnvironmentInterpolator.interpolate(content, self.context)

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise StackFileError(f"invalid YAML in {source}: {e}") from e

        if not data:
            data = {}
        if not isinstance(data, dict):
            raise StackFileError(f"{source} must contain a YAML mapping")

        declared = data.get('functions') or {}
        if not isinstance(declared, dict):
            raise StackFileError(f"`functions` in {source} must be a mapping")

        functions = {}
        for name, spec in declared.items():
            name = str(name)
            if name_filter and not fnmatch.fnmatchcase(name, name_filter):
                continue
            functions[name] = self._parse_function(name, spec, source)

        if name_filter and not functions:
            raise StackFileError(f"no functions matching {name_filter!r} were found in {source}")

        try:
            return StackDefinition(
                version=data.get('version', '1.0'),
                provider=data.get('provider'),
                functions=functions,
            )
        except ValidationError as e:
            raise StackFileError(f"invalid stack file {source}: {e}") from e

    def _parse_function(self, name: str, spec: Any, source: str) -> FunctionDefinition:
        """
        Parses a single function definition.

        :param name: The key of the function under `functions:`.
        :param spec: The function specification dictionary.
        :return: A FunctionDefinition instance.
        """
        if not isinstance(spec, dict):
            raise StackFileError(f"function {name!r} in {source} must be a mapping")

        fields: Dict[str, Any] = dict(spec)
        fields['name'] = name
        try:
            function = FunctionDefinition.model_validate(fields)
        except ValidationError as e:
            raise StackFileError(f"invalid function {name!r} in {source}: {e}") from e

        logger.debug("parsed function %s: %r", name, function)
        return function
