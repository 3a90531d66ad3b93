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
Constants and environment-driven settings for local runs.
"""
import os
from typing import Mapping, Optional
from pydantic import BaseModel

# Directory, relative to the working directory, holding one file per secret.
LOCAL_SECRETS_DIR = ".secrets"
# Where the function's watchdog reads secrets from inside the container.
SECRETS_MOUNT_PATH = "/var/openfaas/secrets"
# Port the function's watchdog listens on inside the container.
FUNCTION_PORT = 8080
DEFAULT_PORT = 8080
DEFAULT_YAML_FILE = "stack.yml"
DEFAULT_TEMPLATE_DIR = "./template"
CONTAINER_RUNTIME = "docker"

EXPERIMENTAL_ENV_VAR = "OPENFAAS_EXPERIMENTAL"


class LocalRunSettings(BaseModel):
    """
    Process-wide settings read from environment variables.
    """
    experimental: bool = False
    template_dir: str = DEFAULT_TEMPLATE_DIR

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LocalRunSettings":
        """
        Builds the settings from the given mapping, or os.environ.

        The experimental switch is on when the variable is present with any
        value other than "0".
        """
        environ = os.environ if environ is None else environ
        flag = environ.get(EXPERIMENTAL_ENV_VAR)
        return cls(
            experimental=flag is not None and flag != "0",
            template_dir=environ.get("OPENFAAS_TEMPLATE_DIR") or DEFAULT_TEMPLATE_DIR,
        )
