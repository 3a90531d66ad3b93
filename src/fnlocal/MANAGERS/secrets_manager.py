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
Management of the local secrets directory mounted into function containers.
"""
import logging
import os
from typing import Iterable
from ..settings import LOCAL_SECRETS_DIR, SECRETS_MOUNT_PATH
from ..errors import MissingSecretsError, SecretsDirectoryError

logger = logging.getLogger(__name__)


class SecretsManager:
    """
    Resolves, creates and checks the directory holding one file per secret.
    """
    def __init__(self, base_dir: str = ".", dir_name: str = LOCAL_SECRETS_DIR):
        """
        Initializes the secrets manager.

        :param base_dir: The base directory the secrets directory lives in.
        :param dir_name: Name of the secrets directory.
        """
        self.base_dir = base_dir
        self.dir_name = dir_name

    def resolve_path(self) -> str:
        """
        Resolves the absolute path of the secrets directory.

        :return: The absolute path.
        """
        try:
            return os.path.abspath(os.path.join(self.base_dir, self.dir_name))
        except OSError as e:
            raise SecretsDirectoryError(f"can't determine secrets folder: {e}") from e

    def ensure_directory(self) -> str:
        """
        Creates the secrets directory with owner-only permissions if it is missing.

        :return: The absolute path of the directory.
        """
        path = self.resolve_path()
        try:
            os.makedirs(path, mode=0o700, exist_ok=True)
        except OSError as e:
            raise SecretsDirectoryError(f"can't create local secrets folder {path!r}: {e}") from e
        return path

    def check(self, names: Iterable[str]):
        """
        Verifies every named secret exists as a file in the secrets directory.

        :param names: Secret names declared by the function.
        :raises MissingSecretsError: Listing every absent secret at once.
        """
        path = self.resolve_path()
        err = MissingSecretsError(path)
        for name in names:
            if not os.path.isfile(os.path.join(path, name)):
                err.add_missing(name)

        if err.missing:
            raise err

    def volume_flag(self, path: str) -> str:
        """
        Returns the flag mounting `path` at the function's secrets path.
        """
        return f"--volume={path}:{SECRETS_MOUNT_PATH}"

    def prepare(self, names: Iterable[str], verify: bool = True) -> str:
        """
        Ensures the directory exists, optionally checks the secrets, and returns the mount flag.

        :param names: Secret names declared by the function.
        :param verify: Whether to check that every secret file is present.
        """
        names = list(names)
        path = self.ensure_directory()
        if verify:
            self.check(names)
        else:
            logger.debug("skipping secrets check for %s", path)
        return self.volume_flag(path)
