"""Intel GPU driver installation from the Intel graphics PPA"""

from ..utils.logging import log_info, log_step, log_success
from ..utils.system import add_user_to_group


def install_gpu_drivers(config, apt):
    """Install compute, OpenCL and media acceleration packages.

    Repository registration and group membership are idempotent, so a
    second run on an already-configured host succeeds. Any apt failure
    propagates to the caller.
    """
    log_step("🎮 Installing Intel GPU drivers...")

    log_info("Installing prerequisite packages...")
    apt.install(*config.prerequisite_packages)

    log_info(f"Adding Intel graphics PPA repository ({config.ppa})...")
    apt.add_repository(config.ppa)

    log_info("Updating package lists...")
    apt.update(force=True)

    log_info("Installing Intel GPU libraries and OpenCL support...")
    apt.install(*config.gpu_compute_packages)

    log_info("Installing Intel media acceleration drivers...")
    apt.install(*config.media_packages)

    log_info(f"Adding user {config.user} to {config.render_group} group...")
    add_user_to_group(config.user, config.render_group)

    log_success("Intel GPU drivers installation completed")
