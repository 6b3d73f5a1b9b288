import pytest
from sitebox.MODELS.host_identity import HostIdentity

BASE_DOCKERFILE = """\
FROM ruby:3.3
# Jekyll toolchain
RUN apt-get update && \\
    apt-get install -y --no-install-recommends build-essential
COPY Gemfile Gemfile.lock /tmp/
RUN cd /tmp && bundle install
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keeps the invoking shell's settings out of the tests."""
    for name in ("PORT", "DOCKER_NO_CACHE", "SITEBOX_IMAGE", "SITEBOX_DOCKER"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def alice():
    return HostIdentity(uid=1000, gid=1000, group="alice", user="alice", home="/home/alice")


@pytest.fixture
def project(tmp_path):
    site = tmp_path / "site"
    site.mkdir()
    (site / "Dockerfile").write_text(BASE_DOCKERFILE)
    return site
