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
Managers for resolving launcher settings from the environment and .env files.
"""
import os
import shlex
from typing import Dict, List, Optional
from dotenv import dotenv_values
from pydantic import BaseModel, Field

ENV_FILE = ".sitebox.env"

TRUE_WORDS = {"1", "true", "yes", "on"}
FALSE_WORDS = {"", "0", "false", "no", "off"}


class Settings(BaseModel):
    """
    Launcher settings. Field aliases are the environment variable names.
    """
    port: int = Field(default=4000, alias="PORT")
    no_cache: str = Field(default="", alias="DOCKER_NO_CACHE")
    image: str = Field(default="chaws-site", alias="SITEBOX_IMAGE")
    docker: str = Field(default="docker", alias="SITEBOX_DOCKER")

    model_config = {"populate_by_name": True}

    def build_flags(self) -> List[str]:
        """
        Extra ``docker build`` flags requested through DOCKER_NO_CACHE.

        Values starting with ``-`` are passed through as flags, other truthy
        words mean ``--no-cache``.
        """
        value = self.no_cache.strip()
        if value.startswith("-"):
            return shlex.split(value)
        if value.lower() in FALSE_WORDS:
            return []
        if value.lower() in TRUE_WORDS:
            return ["--no-cache"]
        raise ValueError(f"Unrecognised DOCKER_NO_CACHE value: {self.no_cache!r}")


class EnvironmentManager:
    """
    Merges settings from defaults, the project's env file, the process
    environment and explicit overrides, in increasing priority.
    """
    def __init__(self, base_dir: str = ".", environ: Optional[Dict[str, str]] = None):
        """
        :param base_dir: The project directory holding the optional env file.
        :param environ: Process environment; defaults to ``os.environ``.
        """
        self.base_dir = base_dir
        self.environ = os.environ if environ is None else environ

    def load_env_file(self) -> Dict[str, str]:
        path = os.path.join(self.base_dir, ENV_FILE)
        if not os.path.exists(path):
            return {}
        return {k: v for k, v in dotenv_values(path).items() if v is not None}

    def get_settings(self, overrides: Optional[Dict[str, object]] = None) -> Settings:
        """
        :param overrides: Explicit values keyed by environment variable name;
            None values are ignored.
        :return: The validated Settings.
        :raises pydantic.ValidationError: If a value does not validate.
        """
        names = [f.alias for f in Settings.model_fields.values()]

        merged: Dict[str, object] = {}
        merged.update(self.load_env_file())
        merged.update(self.environ)
        if overrides:
            merged.update({k: v for k, v in overrides.items() if v is not None})

        # Empty PORT behaves as unset, like ${PORT:-4000}.
        if merged.get("PORT") == "":
            del merged["PORT"]

        return Settings(**{k: merged[k] for k in names if k in merged})
