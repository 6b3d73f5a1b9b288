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
Models describing the host user that invokes the launcher.
"""
import grp
import os
import pwd
from pydantic import BaseModel, field_validator


class HostIdentity(BaseModel):
    """
    The invoking user's numeric ids and names.

    Read once per invocation and used to create an account inside the image
    with the same UID/GID, so files written to bind mounts keep host ownership.
    """
    uid: int
    gid: int
    group: str
    user: str
    home: str

    @field_validator("uid", "gid")
    @classmethod
    def validate_ids(cls, v: int) -> int:
        if v < 0:
            raise ValueError("UID and GID must be non-negative")
        return v

    @field_validator("group", "user")
    @classmethod
    def validate_names(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("User and group names cannot be empty")
        return v.strip()

    @classmethod
    def detect(cls) -> "HostIdentity":
        """
        Detects the identity of the current process.

        The user name and home come from $USER and $HOME when set; the
        password database is only consulted for what is missing. A gid
        without a group entry is named by its number, as ``id -gn`` does.

        :return: The detected HostIdentity.
        :raises RuntimeError: If the user cannot be determined.
        """
        uid = os.getuid()
        gid = os.getgid()
        user = os.environ.get("USER")
        home = os.environ.get("HOME")
        if not user or not home:
            try:
                entry = pwd.getpwuid(uid)
            except KeyError as e:
                raise RuntimeError(
                    f"UID {uid} has no password entry; set USER and HOME"
                ) from e
            user = user or entry.pw_name
            home = home or entry.pw_dir
        try:
            group = grp.getgrgid(gid).gr_name
        except KeyError:
            group = str(gid)
        return cls(uid=uid, gid=gid, group=group, user=user, home=home)
