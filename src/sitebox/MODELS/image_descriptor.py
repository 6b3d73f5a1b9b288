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
Models for the generated image descriptor (Dockerfile).
"""
from typing import List
from pydantic import BaseModel
from .host_identity import HostIdentity


class AccountSpec(BaseModel):
    """
    The non-root account created inside the image.
    """
    name: str
    uid: int
    gid: int
    group: str
    shell: str = "/bin/bash"
    create_home: bool = True

    @classmethod
    def from_identity(cls, identity: HostIdentity) -> "AccountSpec":
        return cls(
            name=identity.user,
            uid=identity.uid,
            gid=identity.gid,
            group=identity.group,
        )


class ImageDescriptor(BaseModel):
    """
    A base Dockerfile plus the account, working directory and default
    command appended to it before every build.
    """
    base: str
    account: AccountSpec
    workdir: str = "/site"
    cmd: List[str] = ["bash"]
