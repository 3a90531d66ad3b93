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
Options controlling a single local run.
"""
import sys
from typing import Any, Dict
from pydantic import BaseModel, Field
from ..settings import DEFAULT_PORT


class RunOptions(BaseModel):
    """
    Runtime options for one local run, fixed before the invocation is built.

    `port` is ignored when `network` is set. `output` and `error` are
    write-only text streams receiving the container's stdout and stderr.
    """
    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    print_only: bool = False
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    network: str = ""
    extra_env: Dict[str, str] = {}

    output: Any = Field(default_factory=lambda: sys.stdout, repr=False)
    error: Any = Field(default_factory=lambda: sys.stderr, repr=False)
