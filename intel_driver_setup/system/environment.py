"""Scratch directory lifecycle: preparation before install, optional cleanup after"""

import os
import shutil

from ..utils.logging import log_info, log_step, log_success


def prepare_environment(config, apt):
    """Create the scratch directory and refresh the package index.

    Index refresh failures propagate: every later install depends on it.

    Returns:
        str: scratch directory used for archive operations
    """
    log_step("🛠️  Preparing installation environment...")

    os.makedirs(config.scratch_dir, exist_ok=True)
    log_info(f"Working directory: {config.scratch_dir}")

    log_info("Updating package lists...")
    apt.update(force=True)

    log_success("Environment preparation completed")
    return config.scratch_dir


def cleanup_temp_files(config, confirm):
    """Offer to delete the scratch directory.

    Args:
        config: SetupConfig
        confirm: callable(question) -> bool

    Returns:
        bool: True if the directory was removed
    """
    log_step("🧹 Cleaning up temporary files...")

    if confirm("Remove temporary installation files?"):
        if os.path.isdir(config.scratch_dir):
            shutil.rmtree(config.scratch_dir)
        log_success("Temporary files cleaned up")
        return True

    log_info(f"Temporary files kept at: {config.scratch_dir}")
    return False
