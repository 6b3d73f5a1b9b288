"""
Unit tests for Dockerfile rendering.
"""
from sitebox.BUILDERS.dockerfile_renderer import DockerfileRenderer
from sitebox.MODELS.image_descriptor import AccountSpec, ImageDescriptor


def make_descriptor(identity, base="FROM ruby:3.3\n"):
    return ImageDescriptor(base=base, account=AccountSpec.from_identity(identity))


class TestDockerfileRenderer:
    """Tests for DockerfileRenderer."""

    def test_appends_account_fragment(self, alice):
        text = DockerfileRenderer().render(make_descriptor(alice))
        assert text == (
            "FROM ruby:3.3\n"
            "\n"
            "RUN groupadd -g 1000 alice && \\\n"
            "    useradd -m -u 1000 -g 1000 -s /bin/bash alice\n"
            "USER alice\n"
            "WORKDIR /site\n"
            'CMD ["bash"]\n'
        )

    def test_base_is_kept_verbatim(self, alice):
        base = "FROM ruby:3.3\nRUN gem install bundler\n"
        text = DockerfileRenderer().render(make_descriptor(alice, base))
        assert text.startswith(base)

    def test_render_is_deterministic(self, alice):
        descriptor = make_descriptor(alice)
        assert DockerfileRenderer().render(descriptor) == DockerfileRenderer().render(descriptor)

    def test_account_without_home(self, alice):
        descriptor = make_descriptor(alice)
        descriptor.account.create_home = False
        text = DockerfileRenderer().render(descriptor)
        assert "useradd -u 1000" in text
        assert " -m " not in text

    def test_custom_command_and_workdir(self, alice):
        descriptor = make_descriptor(alice)
        descriptor.cmd = ["bundle", "exec", "jekyll", "build"]
        descriptor.workdir = "/srv/site"
        text = DockerfileRenderer().render(descriptor)
        assert 'CMD ["bundle", "exec", "jekyll", "build"]' in text
        assert "WORKDIR /srv/site" in text
