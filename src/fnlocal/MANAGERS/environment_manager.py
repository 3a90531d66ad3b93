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
Managers for layering environment variables onto a container invocation.
"""
from typing import Dict, List, Mapping, Optional
from ..MODELS.function_definition import FunctionDefinition
from ..PARSERS.env_parser import EnvParser


class EnvironmentManager:
    """
    Turns the three environment sources of a function into `-e` flags.

    Layers are emitted in a fixed order so that a later layer overrides an
    earlier one at the container runtime (last flag for a key wins):

    1. the function's `environment`
    2. values from its `environment_file` entries, files read in listed order
    3. caller-supplied extra variables

    Within a layer keys are emitted in lexicographic order. Duplicate keys
    across layers are all emitted.
    """
    def __init__(self, parser: Optional[EnvParser] = None):
        self.parser = parser or EnvParser()

    def get_layers(self,
                   function: FunctionDefinition,
                   extra_env: Mapping[str, str]) -> List[Dict[str, str]]:
        """
        Returns the three environment layers in precedence order.

        :raises EnvironmentFileError: If an environment file can't be read.
        """
        return [
            dict(function.environment),
            self.parser.parse_files(function.environment_file),
            dict(extra_env),
        ]

    def env_flags(self, function: FunctionDefinition, extra_env: Mapping[str, str]) -> List[str]:
        """
        Builds the `-e=KEY=VALUE` flags for a function.

        :param function: The function definition.
        :param extra_env: Variables supplied for this run only.
        :return: The flags, lowest precedence first.
        """
        flags = []
        for layer in self.get_layers(function, extra_env):
            for key in sorted(layer):
                flags.append(env_flag(key, layer[key]))
        return flags


def env_flag(key: str, value: str) -> str:
    return f"-e={key}={value}"
