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
Models for language templates found under the template directory.
"""
from typing import Any, Dict, List
from pydantic import BaseModel


class LanguageTemplate(BaseModel):
    """
    Metadata from a template's template.yml.
    """
    language: str = ""
    fprocess: str = ""
    welcome_message: str = ""
    build_options: List[Dict[str, Any]] = []
