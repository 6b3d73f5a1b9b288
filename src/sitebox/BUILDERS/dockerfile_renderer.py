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
Rendering of image descriptors into Dockerfile text.
"""
import json
from jinja2 import Template
from ..MODELS.image_descriptor import ImageDescriptor

ACCOUNT_TEMPLATE = """{{ base }}

RUN groupadd -g {{ account.gid }} {{ account.group }} && \\
    useradd {% if account.create_home %}-m {% endif %}-u {{ account.uid }} -g {{ account.gid }} -s {{ account.shell }} {{ account.name }}
USER {{ account.name }}
WORKDIR {{ workdir }}
CMD {{ cmd }}
"""


class DockerfileRenderer:
    """
    Renders an ImageDescriptor into the Dockerfile handed to ``docker build``.

    Output depends only on the descriptor, so identical host identity and
    base Dockerfile give byte-identical text and docker reuses cached layers.
    """

    def __init__(self):
        self.template = Template(ACCOUNT_TEMPLATE, keep_trailing_newline=True)

    def render(self, descriptor: ImageDescriptor) -> str:
        """
        :param descriptor: The descriptor to render.
        :return: Dockerfile text.
        """
        return self.template.render(
            base=descriptor.base.rstrip(),
            account=descriptor.account,
            workdir=descriptor.workdir,
            cmd=json.dumps(descriptor.cmd),
        )
