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
Launching the site container in the foreground.
"""
import os
import sys
from typing import List, Optional
from ..MANAGERS.volume_manager import VolumeManager
from ..MODELS.launch_config import LaunchConfig, PortBinding
from ..RUNNERS.docker_runner import DockerRunner

SITE_ROOT = "/site"


def serve_command(port: int) -> List[str]:
    """
    The site generator's serve command, listening on all interfaces with an
    empty base path.
    """
    return ["bundle", "exec", "jekyll", "serve",
            "--host", "0.0.0.0", "--port", str(port), "--baseurl="]


class SiteLauncher:
    """
    Starts one container from the built image with the project directory
    mounted at the site root and the port published on the same number
    on both sides.

    The container is removed when it exits; errors such as a busy port or a
    missing image come straight from docker.
    """
    def __init__(self,
                 base_dir: str = ".",
                 image: str = "chaws-site",
                 port: int = 4000,
                 docker: str = "docker",
                 volume_manager: Optional[VolumeManager] = None,
                 runner: Optional[DockerRunner] = None,
                 tty: Optional[bool] = None):
        """
        :param base_dir: The project directory.
        :param image: Image tag, also used as container name and hostname.
        :param port: Port to publish and serve on.
        :param docker: The docker client executable.
        :param volume_manager: Resolves the bind mounts.
        :param runner: Runner used to start the container.
        :param tty: Allocate a terminal; defaults to whether stdin is one.
        """
        self.base_dir = os.path.abspath(base_dir)
        self.image = image
        self.port = port
        self.docker = docker
        self.volume_manager = volume_manager or VolumeManager(self.base_dir)
        self.runner = runner or DockerRunner("site-launcher")
        self.tty = sys.stdin.isatty() if tty is None else tty

    def config(self, command: Optional[List[str]] = None) -> LaunchConfig:
        """
        :param command: Command to run; None serves the site, an empty list
            uses the image's default command.
        """
        return LaunchConfig(
            image=self.image,
            container_name=self.image,
            hostname=self.image,
            project_dir=self.base_dir,
            site_root=SITE_ROOT,
            port=PortBinding(port=self.port),
            volumes=self.volume_manager.prepare_volumes(SITE_ROOT),
            environment={"PORT": str(self.port)},
            tty=self.tty,
            command=serve_command(self.port) if command is None else command,
        )

    def command_line(self, config: LaunchConfig) -> List[str]:
        """
        Builds the ``docker run`` argv for a launch configuration.
        """
        argv = [self.docker, "run"]
        for key, value in config.environment.items():
            argv.append(f"--env={key}={value}")
        argv.append(config.port.publish_arg())
        argv.extend(v.volume_arg() for v in config.volumes)
        argv.append(f"--name={config.container_name}")
        argv.append(f"--hostname={config.hostname}")
        if config.remove_on_exit:
            argv.append("--rm")
        flags = ("i" if config.interactive else "") + ("t" if config.tty else "")
        if flags:
            argv.append(f"-{flags}")
        argv.append(config.image)
        argv.extend(config.command)
        return argv

    def serve(self) -> int:
        """
        Serves the site; replaces the current process with docker.
        """
        config = self.config()
        print(f"[{self.runner.name}] Serving {config.project_dir} on http://localhost:{config.port.port}/")
        return self.runner.exec(self.command_line(config), cwd=self.base_dir)

    def shell(self) -> int:
        """
        Opens the image's default command (a shell) in the site container.
        """
        return self.runner.exec(self.command_line(self.config(command=[])), cwd=self.base_dir)
