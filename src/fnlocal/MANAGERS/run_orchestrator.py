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
Orchestration of a single local run: resolve, build, then print or execute.
"""
import logging
import subprocess
from typing import Optional
from ..MODELS.function_definition import FunctionDefinition
from ..MODELS.run_options import RunOptions
from ..PARSERS.stack_parser import StackParser
from ..BUILDERS.invocation_builder import InvocationBuilder
from ..RUNNERS.process_runner import ProcessRunner
from ..UTILS.gitignore import update_gitignore
from ..UTILS.port_finder import is_port_free
from ..settings import LOCAL_SECRETS_DIR
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


class RunOrchestrator:
    """
    Runs one function from a stack file in a local container.
    """
    def __init__(self,
                 yaml_file: str,
                 builder: Optional[InvocationBuilder] = None,
                 parser: Optional[StackParser] = None,
                 gitignore_path: str = ".gitignore"):
        """
        Initializes the orchestrator.

        :param yaml_file: Path to the stack file.
        :param builder: Builds the container invocation.
        :param parser: Reads the stack file.
        :param gitignore_path: Ignore file that must list the secrets directory.
        """
        self.yaml_file = yaml_file
        self.builder = builder or InvocationBuilder()
        self.parser = parser or StackParser()
        self.gitignore_path = gitignore_path

    def resolve(self, name: str) -> FunctionDefinition:
        """
        Finds the single function in the stack file matching `name`.

        :param name: Function name, may contain shell-style wildcards.
        :raises StackFileError: If nothing matches.
        :raises ConfigurationError: If more than one function matches.
        """
        stack = self.parser.parse(self.yaml_file, name_filter=name)
        if len(stack.functions) > 1:
            raise ConfigurationError(f"multiple functions matching {name!r} in the stack file")
        return next(iter(stack.functions.values()))

    def run(self, name: str, options: RunOptions) -> int:
        """
        Resolves and builds the function, then prints or runs its container.

        In print mode the command line is written to `options.output` and
        nothing is started. Otherwise the container runs in the foreground
        until it exits or the caller is interrupted.

        :param name: The function name.
        :param options: Options for this run.
        :return: 0 on success.
        :raises LocalRunError: If resolving or building fails.
        :raises OSError: If the container runtime can't be launched.
        :raises subprocess.CalledProcessError: If the container exits non-zero.
        """
        function = self.resolve(name)

        update_gitignore(self.gitignore_path, LOCAL_SECRETS_DIR)

        invocation = self.builder.build(function, options)

        if options.print_only:
            options.output.write(f"{invocation}\n")
            return 0

        if options.network:
            where = f"network: {options.network}"
        else:
            where = f"http://0.0.0.0:{options.port}"
            if not is_port_free(options.port):
                logger.warning("port %d looks busy, the container may fail to bind it", options.port)
        options.output.write(f"Starting local-run for: {function.name} on: {where}\n\n")
        if hasattr(options.output, 'flush'):
            options.output.flush()

        runner = ProcessRunner(function.name)
        runner.start(invocation.command, stdout=options.output, stderr=options.error)
        try:
            returncode = runner.wait()
        except KeyboardInterrupt:
            runner.stop()
            raise

        if returncode != 0:
            raise subprocess.CalledProcessError(returncode, invocation.command)
        return 0
