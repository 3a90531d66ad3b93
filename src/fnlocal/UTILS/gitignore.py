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
Keeps local-only paths out of version control.
"""
import logging
import os

logger = logging.getLogger(__name__)


def update_gitignore(path: str = ".gitignore", entry: str = ".secrets") -> bool:
    """
    Ensures `entry` is listed in the ignore file at `path`, creating the file if needed.

    :param path: Path of the ignore file.
    :param entry: Line to add.
    :return: True if the file was changed.
    """
    content = ""
    if os.path.exists(path):
        with open(path, 'r') as f:
            content = f.read()

    if entry in (line.strip() for line in content.splitlines()):
        return False

    with open(path, 'a') as f:
        if content and not content.endswith('\n'):
            f.write('\n')
        f.write(f"{entry}\n")

    logger.debug("added %s to %s", entry, path)
    return True
