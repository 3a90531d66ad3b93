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
Utilities for string interpolation using environment variables.
"""
import re
from typing import Mapping


class EnvironmentInterpolator:
    """
    Utility for interpolating environment variables in strings.
    Supports $VAR, ${VAR}, ${VAR:-default} and ${VAR:+value}.
    """
    # Group 1: braced name, 2: modifier (- or +), 3: alternative, 4: bare name
    PATTERN = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*)(?::(-|\+)([^}]*))?\}|\$([A-Za-z_][A-Za-z0-9_]*)')

    @classmethod
    def interpolate(cls, template: str, context: Mapping[str, str]) -> str:
        """
        Interpolates environment variables in the template string using the provided context.

        Unset variables without a default expand to an empty string, like envsubst.

        :param template: The string containing $VAR or ${VAR} placeholders.
        :param context: The environment variables context.
        :return: The interpolated string.
        """
        def replace(match):
            if match.group(4):
                return context.get(match.group(4), '')

            value = context.get(match.group(1))
            modifier = match.group(2)
            alt_value = match.group(3)

            if modifier == '-':
                # use default if VAR is unset or empty
                return value if value else alt_value
            if modifier == '+':
                # use alt_value only if VAR is set and not empty
                return alt_value if value else ''
            return value if value is not None else ''

        return cls.PATTERN.sub(replace, template)
