"""Installer configuration.

Everything the installer needs to know about the target release lives in a
single immutable SetupConfig built once at startup by default_config() and
handed to each stage.
"""

import os
from dataclasses import dataclass, field

from .utils.system import get_invoking_user

_TARBALL_SUFFIX = ".tar.gz"


@dataclass(frozen=True)
class DriverRelease:
    """Download descriptor for one versioned NPU driver drop.

    The three values are kept literally. consistency_problems() reports
    drift between them but never rewrites them.
    """
    url: str
    filename: str
    directory: str

    def archive_path(self, scratch_dir: str) -> str:
        return os.path.join(scratch_dir, self.filename)

    def extract_path(self, scratch_dir: str) -> str:
        return os.path.join(scratch_dir, self.directory)

    def consistency_problems(self) -> list[str]:
        """Return human-readable mismatches between url, filename and directory."""
        problems: list[str] = []
        url_name = self.url.rstrip("/").rsplit("/", 1)[-1]
        if url_name != self.filename:
            problems.append(
                f"Archive name '{self.filename}' does not match the download URL ('{url_name}')"
            )
        if not self.filename.endswith(_TARBALL_SUFFIX):
            problems.append(f"Archive name '{self.filename}' is not a {_TARBALL_SUFFIX} file")
        elif self.filename[:-len(_TARBALL_SUFFIX)] != self.directory:
            problems.append(
                f"Extraction directory '{self.directory}' does not match archive '{self.filename}'"
            )
        return problems


NPU_DRIVER_RELEASE = DriverRelease(
    url=(
        "https://af01p-ir.devtools.intel.com/artifactory/drivers_vpu_linux_client-ir-local/"
        "engineering-drops/driver/main/release/25ww44.1.1/"
        "npu-linux-driver-ci-1.27.0.20251024-18786122221-ubuntu2404-release.tar.gz"
    ),
    filename="npu-linux-driver-ci-1.27.0.20251024-18786122221-ubuntu2404-release.tar.gz",
    directory="npu-linux-driver-ci-1.27.0.20251024-18786122221-ubuntu2404-release",
)


@dataclass(frozen=True)
class SetupConfig:
    """Immutable installer settings shared by every stage"""
    user: str
    npu_release: DriverRelease = NPU_DRIVER_RELEASE
    scratch_dir: str = "/tmp/intel_drivers"
    expected_os_version: str = "24.04"
    ppa: str = "ppa:kobuk-team/intel-graphics"
    prerequisite_packages: tuple[str, ...] = ("software-properties-common",)
    gpu_compute_packages: tuple[str, ...] = (
        "libze-intel-gpu1",
        "libze1",
        "intel-metrics-discovery",
        "intel-opencl-icd",
        "clinfo",
        "intel-gsc",
    )
    media_packages: tuple[str, ...] = (
        "intel-media-va-driver-non-free",
        "libmfx-gen1",
        "libvpl2",
        "libvpl-tools",
        "libva-glx2",
        "va-driver-all",
        "vainfo",
    )
    npu_dependency_packages: tuple[str, ...] = ("libtbb12", "ocl-icd-libopencl1", "dkms")
    render_group: str = "render"
    npu_installer: str = "npu-drv-installer"
    npu_kernel_module: str = "intel_vpu"
    device_node_patterns: tuple[str, ...] = field(
        default=("/dev/accel*", "/dev/accel/accel*")
    )

    @property
    def archive_path(self) -> str:
        return self.npu_release.archive_path(self.scratch_dir)

    @property
    def extract_path(self) -> str:
        return self.npu_release.extract_path(self.scratch_dir)

    @property
    def installer_path(self) -> str:
        return os.path.join(self.extract_path, self.npu_installer)


def default_config() -> SetupConfig:
    """Build the configuration for the current invocation."""
    return SetupConfig(user=get_invoking_user())
