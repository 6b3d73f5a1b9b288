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
Models for launching the site container: ports, mounts and the run configuration.
"""
from typing import List, Dict
from pydantic import BaseModel, Field


class PortBinding(BaseModel):
    """
    A single port published on the host and listened on in the container.
    """
    port: int = 4000

    def publish_arg(self) -> str:
        return f"--publish={self.port}:{self.port}"


class VolumeMount(BaseModel):
    """
    Defines a mapping between a host path and a container path.
    """
    source: str
    target: str

    def volume_arg(self) -> str:
        return f"--volume={self.source}:{self.target}"


class LaunchConfig(BaseModel):
    """
    Everything needed to start one foreground container serving the site.
    """
    image: str
    container_name: str
    hostname: str
    project_dir: str
    site_root: str = "/site"

    port: PortBinding = Field(default_factory=PortBinding)
    volumes: List[VolumeMount] = []
    environment: Dict[str, str] = {}

    remove_on_exit: bool = True
    interactive: bool = True
    tty: bool = True

    # Empty means the image's default CMD.
    command: List[str] = []
