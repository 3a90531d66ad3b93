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
Builder turning a function definition and run options into a `docker run` invocation.
"""
import logging
from typing import Optional
from ..MODELS.function_definition import FunctionDefinition
from ..MODELS.run_options import RunOptions
from ..MODELS.invocation import Invocation
from ..MANAGERS.environment_manager import EnvironmentManager, env_flag
from ..MANAGERS.secrets_manager import SecretsManager
from ..RUNNERS.entrypoint_executor import EntrypointExecutor
from ..settings import FUNCTION_PORT

logger = logging.getLogger(__name__)


class InvocationBuilder:
    """
    Assembles the command line that starts a function container.

    Arguments are always emitted in this order:

        run --rm -i
        -p=<port>:8080 | --network=<name>
        -e=... (environment, then environment files, then extra env)
        --read-only
        --memory-reservation=... --cpus=...
        --volume=<secrets dir>:/var/openfaas/secrets
        -e=fprocess=<derived>
        <image>

    The fprocess flag comes after every caller-supplied variable so it can't
    be overridden by an `fprocess` key in the extra environment.
    """
    def __init__(self,
                 secrets_manager: Optional[SecretsManager] = None,
                 entrypoint_executor: Optional[EntrypointExecutor] = None,
                 env_manager: Optional[EnvironmentManager] = None):
        """
        Initializes the builder.

        :param secrets_manager: Locates and checks the local secrets directory.
        :param entrypoint_executor: Derives the fprocess value.
        :param env_manager: Produces the environment flags.
        """
        self.secrets_manager = secrets_manager or SecretsManager()
        self.entrypoint_executor = entrypoint_executor or EntrypointExecutor()
        self.env_manager = env_manager or EnvironmentManager()

    def build(self, function: FunctionDefinition, options: RunOptions) -> Invocation:
        """
        Builds the invocation for a function.

        :param function: The function definition.
        :param options: Options for this run.
        :return: The complete invocation.
        :raises BuildError: If any step fails; nothing partial is returned.
        """
        args = ["run", "--rm", "-i"]

        # network mode silently takes precedence over the port
        if options.network:
            args.append(f"--network={options.network}")
        else:
            args.append(f"-p={options.port}:{FUNCTION_PORT}")

        fprocess = self.entrypoint_executor.derive_fprocess(function)

        args.extend(self.env_manager.env_flags(function, options.extra_env))

        if function.readonly_root_filesystem:
            args.append("--read-only")

        if function.limits is not None:
            if function.limits.memory:
                # soft limit, so a debugger can still attach
                args.append(f"--memory-reservation={function.limits.memory}")
            if function.limits.cpu:
                args.append(f"--cpus={function.limits.cpu}")

        if function.secrets:
            args.append(self.secrets_manager.prepare(function.secrets, verify=not options.print_only))

        args.append(env_flag("fprocess", fprocess))

        invocation = Invocation(image=function.image, args=args)
        logger.debug("built invocation for %s: %s", function.name, invocation)
        return invocation
