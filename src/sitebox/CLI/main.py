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
Command Line Interface for sitebox.
"""
import os
import click
from pydantic import ValidationError
from ..BUILDERS.image_builder import BuildError, ImageBuilder
from ..LAUNCHERS.site_launcher import SiteLauncher
from ..MANAGERS.environment_manager import EnvironmentManager
from ..MANAGERS.volume_manager import VolumeManager
from ..MODELS.host_identity import HostIdentity
from ..RUNNERS.docker_runner import DockerRunner


@click.group(invoke_without_command=True)
@click.option('--project-dir', '-C', default='.', type=click.Path(file_okay=False),
              help='Site project directory')
@click.option('--port', '-p', type=int, default=None, help='Port to publish and serve on (env: PORT)')
@click.option('--no-cache', is_flag=True, default=False, help='Rebuild the image without docker layer cache')
@click.option('--dry-run', is_flag=True, help='Print docker commands instead of running them; nothing is written')
@click.option('--verbose', '-v', is_flag=True, help='Report commands and skipped mounts')
@click.pass_context
def cli(ctx, project_dir, port, no_cache, dry_run, verbose):
    """
    sitebox - preview a static site in a container.

    Without a command, builds the image and serves the site.
    """
    ctx.ensure_object(dict)
    project_dir = os.path.abspath(project_dir)

    overrides = {'PORT': port, 'DOCKER_NO_CACHE': '--no-cache' if no_cache else None}
    try:
        settings = EnvironmentManager(project_dir).get_settings(overrides)
        build_flags = settings.build_flags()
    except (ValidationError, ValueError) as e:
        click.echo(f"Error: invalid settings: {e}", err=True)
        ctx.exit(1)

    ctx.obj['project_dir'] = project_dir
    ctx.obj['settings'] = settings
    ctx.obj['builder'] = ImageBuilder(
        project_dir,
        image=settings.image,
        docker=settings.docker,
        build_flags=build_flags,
        runner=DockerRunner("image-builder", dry_run=dry_run, verbose=verbose),
    )
    ctx.obj['launcher'] = SiteLauncher(
        project_dir,
        image=settings.image,
        port=settings.port,
        docker=settings.docker,
        volume_manager=VolumeManager(project_dir, verbose=verbose),
        runner=DockerRunner("site-launcher", dry_run=dry_run, verbose=verbose),
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


def _identity(ctx) -> HostIdentity:
    try:
        return HostIdentity.detect()
    except (RuntimeError, ValueError) as e:
        click.echo(f"Error: cannot determine host user: {e}", err=True)
        ctx.exit(1)


def _build(ctx):
    """
    Builds the image, exiting with docker's status on failure.
    """
    builder = ctx.obj['builder']
    identity = _identity(ctx)
    try:
        builder.build(identity)
    except BuildError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(e.returncode)
    except (FileNotFoundError, ValueError) as e:
        if isinstance(e, FileNotFoundError) and e.filename == builder.docker:
            click.echo(f"Error: {builder.docker} not found", err=True)
            ctx.exit(127)
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def _exec(ctx, start):
    try:
        start()
    except FileNotFoundError as e:
        click.echo(f"Error: {e.filename or e} not found", err=True)
        ctx.exit(127)


@cli.command()
@click.pass_context
def build(ctx):
    """Build the site image."""
    _build(ctx)


@cli.command()
@click.pass_context
def serve(ctx):
    """Build the image and serve the site."""
    _build(ctx)
    _exec(ctx, ctx.obj['launcher'].serve)


@cli.command()
@click.pass_context
def shell(ctx):
    """Build the image and open a shell in the site container."""
    _build(ctx)
    _exec(ctx, ctx.obj['launcher'].shell)


@cli.command()
@click.pass_context
def dockerfile(ctx):
    """Print the generated Dockerfile."""
    builder = ctx.obj['builder']
    identity = _identity(ctx)
    try:
        descriptor = builder.descriptor(identity)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    click.echo(builder.render(descriptor), nl=False)


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()
