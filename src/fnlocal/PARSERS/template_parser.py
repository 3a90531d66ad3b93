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
Parser for language template metadata (template.yml).
"""
import yaml
from pydantic import ValidationError
from ..MODELS.language_template import LanguageTemplate


class TemplateParser:
    """
    Parser for template.yml files.
    """
    def parse(self, template_path: str) -> LanguageTemplate:
        """
        Parses a template.yml from a file path.

        Raises OSError if the file can't be read and ValueError if it is not a
        valid template.
        """
        with open(template_path, 'r') as f:
            content = f.read()
        return self.parse_from_string(content)

    def parse_from_string(self, content: str) -> LanguageTemplate:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"invalid YAML: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("template.yml must be a mapping")
        try:
            return LanguageTemplate.model_validate(data)
        except ValidationError as e:
            raise ValueError(str(e)) from e
