import os
import tarfile
from dataclasses import replace

import pytest

from intel_driver_setup.config import SetupConfig, DriverRelease


class FakeApt:
    """Records apt calls instead of running them"""

    def __init__(self, fail_on=None):
        self.calls = []
        self.repositories = set()
        self.installed = []
        self.fail_on = fail_on

    def update(self, force=False):
        self.calls.append(("update", force))
        if self.fail_on == "update":
            raise RuntimeError("apt-get update failed")

    def install(self, *packages):
        self.calls.append(("install", packages))
        if self.fail_on in packages:
            raise RuntimeError(f"unable to locate package {self.fail_on}")
        for pkg in packages:
            if pkg not in self.installed:
                self.installed.append(pkg)

    def add_repository(self, source):
        self.calls.append(("add_repository", source))
        self.repositories.add(source)


class FakeFetcher:
    """Serves a prebuilt driver tarball and counts downloads"""

    def __init__(self, tarball):
        self.tarball = tarball
        self.fetches = []
        self.extractions = []

    def fetch(self, url, dest):
        self.fetches.append(url)
        with open(self.tarball, "rb") as src, open(dest, "wb") as dst:
            dst.write(src.read())

    def extract(self, archive, cwd):
        self.extractions.append(archive)
        with tarfile.open(archive) as tar:
            tar.extractall(cwd, filter="data")


class FakeRunner:
    """Captures the installer invocation and a snapshot of its directory"""

    def __init__(self):
        self.runs = []
        self.tree_at_run = []

    def run(self, installer):
        self.runs.append(installer)
        self.tree_at_run.append(sorted(os.listdir(os.path.dirname(installer))))


class Answers:
    """Canned responses for the confirmation callback"""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.questions = []

    def __call__(self, question):
        self.questions.append(question)
        return self.answers.pop(0) if self.answers else False


RELEASE = DriverRelease(
    url="https://example.invalid/drops/npu-driver-1.0.0-ubuntu2404.tar.gz",
    filename="npu-driver-1.0.0-ubuntu2404.tar.gz",
    directory="npu-driver-1.0.0-ubuntu2404",
)


@pytest.fixture
def config(tmp_path):
    return replace(
        SetupConfig(user="tester"),
        npu_release=RELEASE,
        scratch_dir=str(tmp_path / "intel_drivers"),
        device_node_patterns=(str(tmp_path / "dev" / "accel*"),),
    )


@pytest.fixture
def driver_tarball(tmp_path):
    """A tarball laid out like the vendor drop: one directory with the installer"""
    src = tmp_path / "build" / RELEASE.directory
    src.mkdir(parents=True)
    (src / "npu-drv-installer").write_text("#!/bin/sh\nexit 0\n")
    (src / "intel-driver-compiler-npu.deb").write_text("deb")
    tarball = tmp_path / "build" / RELEASE.filename
    with tarfile.open(tarball, "w:gz") as tar:
        tar.add(src, arcname=RELEASE.directory)
    return str(tarball)


@pytest.fixture
def apt():
    return FakeApt()


@pytest.fixture
def fetcher(driver_tarball):
    return FakeFetcher(driver_tarball)


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def host(monkeypatch):
    """Stub out every host query so nothing touches the real system"""
    state = {
        "groups": {"tester": ["tester"]},
        "gpasswd": [],
        "sticky_groups": True,
        "lsmod": "Module                  Size  Used by\nintel_vpu 270336  0\n",
        "tools": {"clinfo", "vainfo"},
        "pci": "00:02.0 VGA compatible controller: Intel Corporation Meteor Lake-P [Intel Arc Graphics]\n"
               "00:0b.0 Processing accelerators: Intel Corporation Meteor Lake NPU\n",
        "os": {"NAME": "Ubuntu", "VERSION_ID": "24.04", "PRETTY_NAME": "Ubuntu 24.04.1 LTS"},
    }

    def fake_run_command(cmd, shell=True, check=True, capture_output=False, cwd=None):
        if isinstance(cmd, (list, tuple)):
            cmd = " ".join(cmd)
        if cmd.startswith("id -nG"):
            return " ".join(state["groups"].get(cmd.split()[-1], []))
        if cmd.startswith("sudo gpasswd -a"):
            _, _, _, user, group = cmd.split()
            state["gpasswd"].append((user, group))
            if state["sticky_groups"]:
                state["groups"].setdefault(user, []).append(group)
            return None
        if cmd == "lsmod":
            return state["lsmod"]
        if cmd == "lspci":
            return state["pci"]

        class Result:
            returncode = 0
        return Result()

    monkeypatch.setattr("intel_driver_setup.utils.system.run_command", fake_run_command)
    monkeypatch.setattr("intel_driver_setup.intel.verify.run_command", fake_run_command)
    monkeypatch.setattr("intel_driver_setup.intel.verify.command_exists",
                        lambda name: name in state["tools"])
    monkeypatch.setattr("intel_driver_setup.system.checks.get_os_info", lambda: state["os"])
    monkeypatch.setattr("intel_driver_setup.utils.system.is_root", lambda: False)
    monkeypatch.setattr("intel_driver_setup.system.checks.is_root", lambda: False)
    return state
