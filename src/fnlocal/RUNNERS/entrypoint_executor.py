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
Utilities for resolving the process a function's watchdog runs per request.
"""
import os
from ..MODELS.function_definition import FunctionDefinition
from ..PARSERS.template_parser import TemplateParser
from ..settings import DEFAULT_TEMPLATE_DIR
from ..errors import EntrypointError


class EntrypointExecutor:
    """
    Derives the fprocess value for a function.
    """
    def __init__(self, template_dir: str = DEFAULT_TEMPLATE_DIR):
        """
        :param template_dir: Directory holding one sub-directory per language template.
        """
        self.template_dir = template_dir
        self.parser = TemplateParser()

    def template_path(self, lang: str) -> str:
        return os.path.join(self.template_dir, lang, "template.yml")

    def derive_fprocess(self, function: FunctionDefinition) -> str:
        """
        Returns the function's own fprocess, or the one declared by its language template.

        :param function: The function definition.
        :return: The fprocess command string.
        :raises EntrypointError: If neither source provides a value.
        """
        if function.fprocess:
            return function.fprocess

        if not function.lang:
            raise EntrypointError(f"function {function.name!r} sets neither fprocess nor lang")

        path = self.template_path(function.lang)
        if not os.path.exists(path):
            raise EntrypointError(
                f"template {function.lang!r} not found at {path}, pull the template or set fprocess")

        try:
            template = self.parser.parse(path)
        except (OSError, ValueError) as e:
            raise EntrypointError(f"can't read template {path}: {e}") from e

        if not template.fprocess:
            raise EntrypointError(f"template {path} does not declare an fprocess")
        return template.fprocess
