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
Execution of the container process with stream forwarding and lifecycle management.
"""
import io
import logging
import subprocess
import threading
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


class ProcessRunner:
    """
    Manages the execution of a single foreground process.
    """
    def __init__(self, name: str):
        """
        Initializes the process runner.

        Args:
            name (str): Identifier for the process, used in log messages.
        """
        self.name = name
        self.process: Optional[subprocess.Popen] = None
        self._forwarders: List[threading.Thread] = []

    def start(self, command: List[str], stdout: Any, stderr: Any):
        """
        Starts the process.

        Sinks backed by a file descriptor are handed to the child directly.
        Any other writable text stream is fed from a pipe by a forwarding thread.

        Args:
            command (List[str]): Command and arguments to execute.
            stdout: Sink for the process's standard output.
            stderr: Sink for the process's standard error.

        Raises:
            OSError: If the program can't be launched.
        """
        out_target = self._resolve_sink(stdout)
        err_target = self._resolve_sink(stderr)

        logger.debug("[%s] starting command: %s", self.name, command)
        self.process = subprocess.Popen(
            command,
            stdin=subprocess.DEVNULL,
            stdout=out_target,
            stderr=err_target,
            # Avoid shell=True for security reasons (CWE-78)
            shell=False,
        )

        if out_target is subprocess.PIPE:
            self._forward(self.process.stdout, stdout)
        if err_target is subprocess.PIPE:
            self._forward(self.process.stderr, stderr)

    def wait(self) -> int:
        """
        Blocks until the process exits and all output has been forwarded.

        Returns:
            int: The process's exit code.
        """
        if self.process is None:
            raise RuntimeError(f"[{self.name}] process was never started")
        returncode = self.process.wait()
        for thread in self._forwarders:
            thread.join()
        self._forwarders = []
        logger.debug("[%s] exited with code %s", self.name, returncode)
        return returncode

    def stop(self, timeout: int = 10):
        """
        Stops the process by sending SIGTERM, followed by SIGKILL if it doesn't stop.

        Args:
            timeout (int): Seconds to wait for termination before killing.
        """
        if self.process and self.process.poll() is None:
            logger.info("[%s] stopping process...", self.name)
            self.process.terminate()
            try:
                self.process.wait(timeout=timeout)
            except subprocess.TimeoutExpired:
                logger.warning("[%s] process did not terminate, killing...", self.name)
                self.process.kill()
                self.process.wait()

    @staticmethod
    def _resolve_sink(stream: Any):
        try:
            stream.fileno()
        except (AttributeError, io.UnsupportedOperation, ValueError):
            return subprocess.PIPE
        if hasattr(stream, 'flush'):
            stream.flush()
        return stream

    def _forward(self, source, sink):
        def pump():
            with io.TextIOWrapper(source, errors='replace') as reader:
                for line in reader:
                    sink.write(line)
                    if hasattr(sink, 'flush'):
                        sink.flush()
        thread = threading.Thread(target=pump, name=f"{self.name}-forwarder", daemon=True)
        thread.start()
        self._forwarders.append(thread)
