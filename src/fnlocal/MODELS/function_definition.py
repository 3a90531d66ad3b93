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
Models for functions declared in a stack file.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


class FunctionResources(BaseModel):
    """
    Memory and CPU quantities, either of which may be left empty.
    """
    memory: str = ""
    cpu: str = ""

    @field_validator('memory', 'cpu', mode='before')
    @classmethod
    def _quantity_to_str(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)


class FunctionDefinition(BaseModel):
    """
    A single function as declared under `functions:` in a stack file.
    """
    model_config = {"frozen": True}

    name: str = ""
    image: str = Field(min_length=1)
    lang: str = ""
    handler: str = ""
    fprocess: str = ""

    # Environment
    environment: Dict[str, str] = {}
    environment_file: List[str] = []

    secrets: List[str] = []

    # Resources
    limits: Optional[FunctionResources] = None
    requests: Optional[FunctionResources] = None
    readonly_root_filesystem: bool = False

    # Metadata
    labels: Dict[str, str] = {}
    annotations: Dict[str, str] = {}

    @field_validator('environment', 'labels', 'annotations', mode='before')
    @classmethod
    def _values_to_str(cls, value: Any) -> Dict[str, str]:
        # YAML turns `DEBUG: true` or `PORT: 3000` into non-strings.
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(k): scalar_to_str(v) for k, v in value.items()}
        return value

    @field_validator('environment_file', 'secrets', mode='before')
    @classmethod
    def _none_to_list(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


def scalar_to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
