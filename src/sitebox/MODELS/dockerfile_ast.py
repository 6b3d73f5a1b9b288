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
Models for a parsed base Dockerfile.
"""
from typing import List, Optional
from pydantic import BaseModel


class Instruction(BaseModel):
    """
    One Dockerfile instruction, e.g. ``FROM ruby:3.3``.
    """
    instruction: str
    arguments: List[str]
    raw: str


class DockerfileAST(BaseModel):
    """
    The instructions of a base Dockerfile, in file order.
    """
    instructions: List[Instruction] = []

    def find(self, name: str) -> List[Instruction]:
        return [i for i in self.instructions if i.instruction == name]

    @property
    def base_image(self) -> Optional[str]:
        """
        The image named by the last FROM (the final build stage), skipping
        flags such as ``--platform=``. None if there is no usable FROM.
        """
        stages = self.find("FROM")
        if not stages:
            return None
        words = " ".join(stages[-1].arguments).split()
        images = [w for w in words if not w.startswith("--")]
        return images[0] if images else None
