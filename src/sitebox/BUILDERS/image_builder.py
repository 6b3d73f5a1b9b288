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
Builders for the site image: descriptor generation and ``docker build``.
"""
import os
from typing import List, Optional
from ..MODELS.host_identity import HostIdentity
from ..MODELS.image_descriptor import AccountSpec, ImageDescriptor
from ..PARSERS.dockerfile_parser import DockerfileParser
from ..RUNNERS.docker_runner import DockerRunner
from .dockerfile_renderer import DockerfileRenderer


class BuildError(RuntimeError):
    """
    Raised when ``docker build`` exits non-zero.
    """
    def __init__(self, image: str, returncode: int):
        super().__init__(f"Building image {image} failed with exit status {returncode}")
        self.image = image
        self.returncode = returncode


class ImageBuilder:
    """
    Turns the project's base Dockerfile into an image with an account
    matching the host user.

    The derived Dockerfile is regenerated on every build; caching is left
    entirely to docker's layer cache.
    """
    def __init__(self,
                 base_dir: str = ".",
                 image: str = "chaws-site",
                 dockerfile: str = "Dockerfile",
                 scratch_dir: str = "tmp",
                 docker: str = "docker",
                 build_flags: Optional[List[str]] = None,
                 runner: Optional[DockerRunner] = None):
        """
        Initializes the ImageBuilder.

        :param base_dir: The project directory, also used as build context.
        :param image: Tag for the built image.
        :param dockerfile: Base Dockerfile, relative to base_dir.
        :param scratch_dir: Where the derived Dockerfile is written, relative to base_dir.
        :param docker: The docker client executable.
        :param build_flags: Extra ``docker build`` flags such as ``--no-cache``.
        :param runner: Runner used to execute the build.
        """
        self.base_dir = os.path.abspath(base_dir)
        self.image = image
        self.dockerfile = os.path.join(self.base_dir, dockerfile)
        self.scratch_dir = os.path.join(self.base_dir, scratch_dir)
        self.docker = docker
        self.build_flags = build_flags or []
        self.runner = runner or DockerRunner("image-builder")
        self.parser = DockerfileParser()
        self.renderer = DockerfileRenderer()

    def descriptor(self, identity: HostIdentity) -> ImageDescriptor:
        """
        Reads the base Dockerfile and combines it with the host account.

        :param identity: The invoking host user.
        :return: The descriptor to render.
        :raises FileNotFoundError: If the base Dockerfile is missing.
        :raises ValueError: If the base Dockerfile has no FROM instruction.
        """
        with open(self.dockerfile, 'r') as f:
            base = f.read()
        if self.parser.parse_from_string(base).base_image is None:
            raise ValueError(f"{self.dockerfile} has no FROM instruction")
        return ImageDescriptor(base=base, account=AccountSpec.from_identity(identity))

    def render(self, descriptor: ImageDescriptor) -> str:
        return self.renderer.render(descriptor)

    @property
    def derived_path(self) -> str:
        return os.path.join(self.scratch_dir, "Dockerfile")

    def write(self, descriptor: ImageDescriptor) -> str:
        """
        Writes the rendered Dockerfile to the scratch directory.

        :return: Path of the written file.
        """
        os.makedirs(self.scratch_dir, exist_ok=True)
        path = self.derived_path
        with open(path, 'w') as f:
            f.write(self.render(descriptor))
        return path

    def build_command(self, dockerfile_path: str) -> List[str]:
        return [self.docker, "build", *self.build_flags,
                "-t", self.image, "-f", dockerfile_path, self.base_dir]

    def build(self, identity: HostIdentity) -> str:
        """
        Generates the Dockerfile and builds the image.

        :param identity: The invoking host user.
        :return: The image tag.
        :raises BuildError: If docker build fails.
        """
        descriptor = self.descriptor(identity)
        if self.runner.dry_run:
            path = self.derived_path
        else:
            path = self.write(descriptor)
        print(f"[{self.runner.name}] Building {self.image} for {identity.user} ({identity.uid}:{identity.gid})")
        returncode = self.runner.run(self.build_command(path), cwd=self.base_dir)
        if returncode != 0:
            raise BuildError(self.image, returncode)
        return self.image
