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
Command Line Interface for fnlocal.
"""
import logging
import subprocess
import sys
import click
from ..MODELS.run_options import RunOptions
from ..MANAGERS.run_orchestrator import RunOrchestrator
from ..BUILDERS.invocation_builder import InvocationBuilder
from ..RUNNERS.entrypoint_executor import EntrypointExecutor
from ..PARSERS.stack_parser import StackParser
from ..settings import DEFAULT_PORT, DEFAULT_YAML_FILE, EXPERIMENTAL_ENV_VAR, LocalRunSettings
from ..errors import LocalRunError


def parse_env(ctx, param, values):
    """
    Click callback turning repeated KEY=VALUE options into a dict.
    """
    env = {}
    for item in values:
        key, sep, value = item.partition('=')
        if not sep or not key:
            raise click.BadParameter(f"{item!r} is not in KEY=VALUE format")
        env[key] = value
    return env


@click.group()
@click.option('--yaml', '-f', 'yaml_file', default=DEFAULT_YAML_FILE, envvar='OPENFAAS_YAML',
              show_default=True, help='Path to the stack file')
@click.option('--envsubst/--no-envsubst', default=True,
              help='Substitute environment variables in the stack file')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, yaml_file, envsubst, verbose):
    """
    fnlocal - run function images locally for manual testing.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj['yaml_file'] = yaml_file
    ctx.obj['envsubst'] = envsubst
    ctx.obj['settings'] = LocalRunSettings.from_env()


@cli.command('local-run')
@click.argument('names', nargs=-1)
@click.option('--print', 'print_only', is_flag=True, help='Print the docker command instead of running it')
@click.option('--port', '-p', default=DEFAULT_PORT, show_default=True,
              type=click.IntRange(0, 65535), help='Port to bind the function to')
@click.option('--network', default='',
              help="Connect the function to an existing network, use 'host' to reach processes "
                   "already running on localhost. When set, --port is ignored")
@click.option('--env', '-e', 'extra_env', multiple=True, callback=parse_env, metavar='KEY=VALUE',
              help='Additional environment variables, use this to experiment with different values')
@click.pass_context
def local_run(ctx, names, print_only, port, network, extra_env):
    """
    Start a function with docker for local testing (experimental feature).

    Providing the function image has already been built, this starts a
    container on your local machine from it. The function is bound to the
    port given by --port, or 8080 by default.

    There is limited support for secrets, and the function cannot contact
    other services deployed within your cluster.

    \b
    Examples:
      fnlocal local-run stronghash
      fnlocal local-run stronghash --port 8081
      fnlocal -f ./stronghash.yml local-run stronghash
    """
    settings = ctx.obj['settings']
    if not settings.experimental:
        raise click.ClickException(
            f"this command is experimental, set {EXPERIMENTAL_ENV_VAR}=1 to use it")
    if len(names) < 1:
        raise click.UsageError("expected the name of the function")
    if len(names) > 1:
        raise click.UsageError("only one function name is allowed")

    options = RunOptions(
        print_only=print_only,
        port=port,
        network=network,
        extra_env=extra_env,
        output=sys.stdout,
        error=sys.stderr,
    )
    orchestrator = RunOrchestrator(
        ctx.obj['yaml_file'],
        builder=InvocationBuilder(entrypoint_executor=EntrypointExecutor(settings.template_dir)),
        parser=StackParser(envsubst=ctx.obj['envsubst']),
    )

    try:
        orchestrator.run(names[0], options)
    except subprocess.CalledProcessError as e:
        # killed by signal N: report 128+N like a shell
        ctx.exit(e.returncode if e.returncode >= 0 else 128 - e.returncode)
    except (LocalRunError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()
