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
Parser for the project's base Dockerfile.
"""
import json
import re
from ..MODELS.dockerfile_ast import DockerfileAST, Instruction


class DockerfileParser:
    """
    Splits a Dockerfile into instructions.

    Only enough structure is recovered to validate the base descriptor
    before the account fragment is appended to it; the text itself is
    passed to ``docker build`` untouched.
    """
    def parse_from_string(self, content: str) -> DockerfileAST:
        """
        Parses Dockerfile text.

        Args:
            content (str): Content of the Dockerfile.

        Returns:
            DockerfileAST: The parsed instructions.
        """
        content = re.sub(r'^\s*#.*$', '', content, flags=re.MULTILINE)
        content = re.sub(r'\\[ \t]*\n', ' ', content)

        # Instruction keywords are case-insensitive.
        pattern = re.compile(r'^[ \t]*([A-Za-z]+)(?:[ \t]+(.*))?$', re.MULTILINE)

        ast = DockerfileAST()
        for match in pattern.finditer(content):
            name = match.group(1).upper()
            args_str = (match.group(2) or '').strip()

            args = [args_str] if args_str else []
            if args_str.startswith('[') and args_str.endswith(']'):
                try:
                    parsed = json.loads(args_str)
                except json.JSONDecodeError:
                    parsed = None
                if isinstance(parsed, list):
                    args = [str(a) for a in parsed]

            ast.instructions.append(Instruction(
                instruction=name,
                arguments=args,
                raw=match.group(0).strip()
            ))

        return ast
