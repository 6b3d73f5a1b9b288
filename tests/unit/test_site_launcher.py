"""
Unit tests for the site launcher.
"""
from sitebox.LAUNCHERS.site_launcher import SiteLauncher, serve_command
from sitebox.MANAGERS.volume_manager import VolumeManager
from sitebox.RUNNERS.docker_runner import DockerRunner


class RecordingRunner(DockerRunner):
    def __init__(self):
        super().__init__("site-launcher")
        self.commands = []

    def exec(self, command, cwd=None):
        self.commands.append(command)
        return 0


def make_launcher(project, home, **kwargs):
    runner = RecordingRunner()
    launcher = SiteLauncher(
        str(project),
        volume_manager=VolumeManager(str(project), home=str(home)),
        runner=runner,
        tty=False,
        **kwargs
    )
    return launcher, runner


class TestSiteLauncher:
    """Tests for SiteLauncher."""

    def test_default_command_line(self, project, tmp_path):
        launcher, runner = make_launcher(project, tmp_path / "home")
        launcher.serve()
        assert runner.commands[0] == [
            "docker", "run",
            "--env=PORT=4000",
            "--publish=4000:4000",
            f"--volume={project}:/site",
            "--name=chaws-site",
            "--hostname=chaws-site",
            "--rm",
            "-i",
            "chaws-site",
            "bundle", "exec", "jekyll", "serve",
            "--host", "0.0.0.0", "--port", "4000", "--baseurl=",
        ]

    def test_custom_port_used_everywhere(self, project, tmp_path):
        launcher, runner = make_launcher(project, tmp_path / "home", port=5001)
        launcher.serve()
        argv = runner.commands[0]
        assert "--publish=5001:5001" in argv
        assert "--env=PORT=5001" in argv
        assert argv[argv.index("--port") + 1] == "5001"
        assert not any("4000" in arg for arg in argv if not arg.startswith("--volume"))

    def test_credentials_mounted_when_present(self, project, tmp_path):
        home = tmp_path / "home"
        home.mkdir()
        (home / ".gitconfig").write_text("")
        launcher, runner = make_launcher(project, home)
        launcher.serve()
        assert f"--volume={home}/.gitconfig:{home}/.gitconfig" in runner.commands[0]

    def test_tty(self, project, tmp_path):
        launcher, runner = make_launcher(project, tmp_path)
        launcher.tty = True
        launcher.serve()
        assert "-it" in runner.commands[0]

    def test_shell_uses_image_default_command(self, project, tmp_path):
        launcher, runner = make_launcher(project, tmp_path)
        launcher.shell()
        assert runner.commands[0][-1] == "chaws-site"

    def test_image_name(self, project, tmp_path):
        launcher, runner = make_launcher(project, tmp_path, image="blog")
        config = launcher.config()
        assert config.container_name == "blog"
        assert config.hostname == "blog"
        assert config.remove_on_exit


def test_serve_command():
    assert serve_command(4000)[-3:] == ["--port", "4000", "--baseurl="]
