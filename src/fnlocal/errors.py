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
Exceptions raised while resolving, building and running a local function.
"""
from typing import List, Optional


class LocalRunError(Exception):
    """
    Base class for every error raised by fnlocal.
    """


class ConfigurationError(LocalRunError):
    """
    The request cannot be satisfied as given (ambiguous name, disabled command).
    """


class StackFileError(ConfigurationError):
    """
    The stack file is missing, unreadable, or holds no matching function.
    """


class BuildError(LocalRunError):
    """
    The function definition could not be turned into a container invocation.
    """


class EntrypointError(BuildError):
    """
    The fprocess value could not be derived for a function.
    """


class EnvironmentFileError(BuildError):
    """
    An environment file could not be read or parsed.
    """
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"can't read environment file {path!r}: {reason}")


class SecretsDirectoryError(BuildError):
    """
    The local secrets directory could not be resolved or created.
    """


class MissingSecretsError(BuildError):
    """
    Collects every secret file that is absent from the secrets directory.

    Secrets are accumulated with add_missing() so that one error reports the
    whole set instead of failing on the first absent file.
    """
    def __init__(self, directory: str, missing: Optional[List[str]] = None):
        self.directory = directory
        self.missing: List[str] = list(missing or [])
        super().__init__()

    def add_missing(self, name: str):
        self.missing.append(name)

    def __str__(self) -> str:
        return f"create the following secrets ({', '.join(self.missing)}) in: \"{self.directory}\""
