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
Volume management for the site container, handling the project mount and optional credential mounts.
"""
import os
from typing import List, Optional
from ..MODELS.launch_config import VolumeMount

# Relative to the host user's home directory.
CREDENTIAL_PATHS = [".gitconfig", os.path.join(".config", "git")]


class VolumeManager:
    """
    Resolves the bind mounts for the site container.

    The project directory is always mounted read-write at the site root.
    Git credential paths are mounted at the same location inside the
    container, but only when they exist on the host.
    """
    def __init__(self, base_dir: str = ".", home: Optional[str] = None, verbose: bool = False):
        """
        :param base_dir: The project directory.
        :param home: Home directory holding the credential paths.
        :param verbose: Report skipped optional mounts.
        """
        self.base_dir = os.path.abspath(base_dir)
        self.home = home if home is not None else os.path.expanduser("~")
        self.verbose = verbose

    def project_mount(self, site_root: str = "/site") -> VolumeMount:
        return VolumeMount(source=self.base_dir, target=site_root)

    def credential_mounts(self, paths: Optional[List[str]] = None) -> List[VolumeMount]:
        """
        Builds mounts for the credential paths that exist.

        :param paths: Paths to consider, absolute or relative to home.
        :return: One mount per existing path, in input order.
        """
        mounts = []
        for path in paths if paths is not None else CREDENTIAL_PATHS:
            source = self.resolve_source(path)
            if not os.path.exists(source):
                if self.verbose:
                    print(f"[volumes] Skipping {source}: not found")
                continue
            mounts.append(VolumeMount(source=source, target=source))
        return mounts

    def prepare_volumes(self, site_root: str = "/site", credential_paths: Optional[List[str]] = None) -> List[VolumeMount]:
        """
        :return: The project mount followed by existing credential mounts.
        """
        return [self.project_mount(site_root)] + self.credential_mounts(credential_paths)

    def resolve_source(self, source: str) -> str:
        """
        Resolves a credential path against the home directory.

        :param source: Absolute path, ``~`` path, or path relative to home.
        :return: The absolute host path.
        """
        if source.startswith("~"):
            source = self.home + source[1:]
        return os.path.abspath(os.path.join(self.home, source))
