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
Execution of docker commands in the foreground.
"""
import os
import shlex
import subprocess
import sys
from typing import List


class DockerRunner:
    """
    Runs docker client commands attached to the invoking terminal.

    Nothing is captured or retried: docker's output and exit status are the
    caller's output and exit status.
    """
    def __init__(self, name: str = "docker", dry_run: bool = False, verbose: bool = False):
        """
        Args:
            name (str): Prefix used in progress messages.
            dry_run (bool): Print commands instead of running them.
            verbose (bool): Print each command before running it.
        """
        self.name = name
        self.dry_run = dry_run
        self.verbose = verbose

    def describe(self, command: List[str]) -> str:
        return shlex.join(command)

    def run(self, command: List[str], cwd: str = None) -> int:
        """
        Runs a command and blocks until it exits.

        Args:
            command (List[str]): Command and arguments.
            cwd (str): Directory to run in.

        Returns:
            int: The command's exit status.

        Raises:
            FileNotFoundError: If the executable does not exist.
        """
        if self.dry_run:
            print(self.describe(command))
            return 0
        if self.verbose:
            print(f"[{self.name}] {self.describe(command)}")
        # Avoid shell=True for security reasons (CWE-78)
        return subprocess.run(command, cwd=cwd, shell=False).returncode

    def exec(self, command: List[str], cwd: str = None) -> int:
        """
        Replaces the current process with the command.

        The container then receives terminal signals directly and its exit
        status becomes the launcher's. Only returns in dry-run mode.

        Args:
            command (List[str]): Command and arguments.
            cwd (str): Directory to switch to first.

        Raises:
            FileNotFoundError: If the executable does not exist.
        """
        if self.dry_run:
            print(self.describe(command))
            return 0
        if self.verbose:
            print(f"[{self.name}] exec {self.describe(command)}")
        if cwd:
            os.chdir(cwd)
        # Output buffered so far would be lost across exec.
        sys.stdout.flush()
        sys.stderr.flush()
        os.execvp(command[0], command)
