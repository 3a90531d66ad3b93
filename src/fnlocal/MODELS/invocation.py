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
The fully assembled container invocation for a function.
"""
import shlex
from dataclasses import dataclass, field
from typing import List
from ..settings import CONTAINER_RUNTIME


@dataclass(frozen=True)
class Invocation:
    """
    A `docker run` command line.

    Examples:
        - docker run --rm -i -p=8080:8080 -e=fprocess=cat functions/alpine:latest
    """

    image: str
    args: List[str] = field(default_factory=list)
    program: str = CONTAINER_RUNTIME

    @property
    def command(self) -> List[str]:
        """Full argv: program, flags, then the image."""
        return [self.program, *self.args, self.image]

    @property
    def flags(self) -> List[str]:
        """Flags after the `run` subcommand, excluding the image."""
        return list(self.args[1:])

    def __str__(self) -> str:
        return shlex.join(self.command)
