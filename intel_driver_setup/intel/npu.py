"""Intel NPU driver installation from the vendor driver archive.

The archive is downloaded once into the scratch directory and reused on
later runs. Its extraction is always rebuilt from scratch before the
bundled installer runs.
"""

import os
import shutil

from ..utils.logging import log_info, log_step, log_success
from ..utils.system import SetupError, run_command


class ArchiveFetcher:
    """Downloads and unpacks the vendor archive with wget and tar"""

    def fetch(self, url, dest):
        """Download url to dest.

        The download lands in a .part file first so an interrupted
        transfer never looks like a finished archive on the next run.
        """
        partial = f"{dest}.part"
        run_command(["wget", "-O", partial, url])
        os.replace(partial, dest)

    def extract(self, archive, cwd):
        """Unpack archive into cwd"""
        run_command(["tar", "xf", archive], cwd=cwd)


class VendorInstallerRunner:
    """Runs the installer binary shipped inside the vendor archive"""

    def run(self, installer):
        workdir = os.path.dirname(installer)
        name = os.path.basename(installer)
        run_command(["chmod", "a+x", name], cwd=workdir)
        run_command(["sudo", f"./{name}"], cwd=workdir)


def download_driver_archive(config, fetcher):
    """Fetch the archive unless it is already in the scratch directory.

    Returns:
        bool: True if a download happened
    """
    log_info("Downloading Intel NPU driver...")
    if os.path.isfile(config.archive_path):
        log_info("NPU driver archive already exists, using existing file")
        return False

    fetcher.fetch(config.npu_release.url, config.archive_path)
    return True


def extract_driver_archive(config, fetcher):
    """Replace any previous extraction with a fresh one"""
    log_info("Extracting NPU driver archive...")
    if os.path.isdir(config.extract_path):
        log_info("Removing existing extraction directory...")
        shutil.rmtree(config.extract_path)

    fetcher.extract(config.archive_path, config.scratch_dir)


def install_npu_drivers(config, apt, fetcher, runner):
    """Install NPU dependencies, then the vendor driver.

    Download, extraction and installer failures all propagate.
    """
    log_step("🧠 Installing Intel NPU drivers...")

    log_info("Installing NPU driver dependencies...")
    apt.update(force=True)
    apt.install(*config.npu_dependency_packages)

    download_driver_archive(config, fetcher)
    extract_driver_archive(config, fetcher)

    log_info("Installing Intel NPU driver...")
    if not os.path.isfile(config.installer_path):
        raise SetupError(f"NPU installer not found at {config.installer_path}")
    runner.run(config.installer_path)

    log_success("Intel NPU drivers installation completed")
