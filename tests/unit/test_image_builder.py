"""
Unit tests for the image builder.
"""
import pytest
from sitebox.BUILDERS.image_builder import BuildError, ImageBuilder
from sitebox.RUNNERS.docker_runner import DockerRunner


class RecordingRunner(DockerRunner):
    def __init__(self, returncode=0):
        super().__init__("image-builder")
        self.returncode = returncode
        self.commands = []

    def run(self, command, cwd=None):
        self.commands.append((command, cwd))
        return self.returncode


class TestImageBuilder:
    """Tests for ImageBuilder."""

    def test_build_command(self, project, alice):
        runner = RecordingRunner()
        builder = ImageBuilder(str(project), runner=runner)
        assert builder.build(alice) == "chaws-site"

        command, cwd = runner.commands[0]
        assert command == ["docker", "build", "-t", "chaws-site",
                           "-f", str(project / "tmp" / "Dockerfile"), str(project)]
        assert cwd == str(project)

    def test_build_flags(self, project, alice):
        runner = RecordingRunner()
        ImageBuilder(str(project), build_flags=["--no-cache"], runner=runner).build(alice)
        assert runner.commands[0][0][:3] == ["docker", "build", "--no-cache"]

    def test_writes_derived_dockerfile(self, project, alice):
        ImageBuilder(str(project), runner=RecordingRunner()).build(alice)
        text = (project / "tmp" / "Dockerfile").read_text()
        assert text.startswith((project / "Dockerfile").read_text().rstrip())
        assert "useradd -m -u 1000 -g 1000 -s /bin/bash alice" in text
        assert text.endswith('USER alice\nWORKDIR /site\nCMD ["bash"]\n')

    def test_rebuild_is_identical(self, project, alice):
        """Unchanged identity and base give the same Dockerfile, so docker reuses its cache."""
        builder = ImageBuilder(str(project), runner=RecordingRunner())
        builder.build(alice)
        first = (project / "tmp" / "Dockerfile").read_bytes()
        builder.build(alice)
        assert (project / "tmp" / "Dockerfile").read_bytes() == first

    def test_regenerated_for_new_identity(self, project, alice):
        builder = ImageBuilder(str(project), runner=RecordingRunner())
        builder.build(alice)
        bob = alice.model_copy(update={"uid": 1001, "user": "bob"})
        builder.build(bob)
        text = (project / "tmp" / "Dockerfile").read_text()
        assert "USER bob" in text
        assert "useradd -m -u 1001 -g 1000 -s /bin/bash bob" in text

    def test_build_failure(self, project, alice):
        runner = RecordingRunner(returncode=2)
        with pytest.raises(BuildError) as exc:
            ImageBuilder(str(project), runner=runner).build(alice)
        assert exc.value.returncode == 2
        assert len(runner.commands) == 1

    def test_missing_base_dockerfile(self, tmp_path, alice):
        runner = RecordingRunner()
        with pytest.raises(FileNotFoundError):
            ImageBuilder(str(tmp_path), runner=runner).build(alice)
        assert runner.commands == []

    def test_base_without_from(self, tmp_path, alice):
        (tmp_path / "Dockerfile").write_text("RUN echo hi\n")
        with pytest.raises(ValueError):
            ImageBuilder(str(tmp_path), runner=RecordingRunner()).build(alice)

    def test_dry_run_writes_nothing(self, project, alice, capsys):
        runner = DockerRunner("image-builder", dry_run=True)
        ImageBuilder(str(project), runner=runner).build(alice)
        assert not (project / "tmp").exists()
        assert f"-f {project / 'tmp' / 'Dockerfile'}" in capsys.readouterr().out

    def test_from_without_image(self, tmp_path, alice):
        (tmp_path / "Dockerfile").write_text("FROM \n")
        with pytest.raises(ValueError):
            ImageBuilder(str(tmp_path), runner=RecordingRunner()).build(alice)
