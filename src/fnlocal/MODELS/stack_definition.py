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
Models for a parsed stack file.
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, field_validator
from .function_definition import FunctionDefinition


class Provider(BaseModel):
    """
    The `provider:` block of a stack file.
    """
    name: str = "openfaas"
    gateway: str = ""


class StackDefinition(BaseModel):
    """
    Complete stack file: provider settings plus the declared functions.
    """
    version: str = "1.0"
    provider: Optional[Provider] = None
    functions: Dict[str, FunctionDefinition] = {}

    @field_validator('version', mode='before')
    @classmethod
    def _version_to_str(cls, value: Any) -> str:
        # `version: 1.0` is read by YAML as a float.
        return str(value)
