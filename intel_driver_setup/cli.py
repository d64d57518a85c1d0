"""Intel Driver Setup - Command Line Interface

Entry point for the intel-setup CLI command and python3 -m intel_driver_setup.
Runs a fixed, strictly sequential pipeline; the only interaction is the
cleanup and reboot confirmations at the end.
"""

import sys
import traceback

from intel_driver_setup.config import default_config
from intel_driver_setup.utils.logging import (
    log_error, log_header, log_step, log_info, log_success, log_warn, log_detail,
)
from intel_driver_setup.utils.prompts import prompt_yes_no
from intel_driver_setup.utils.system import AptManager, SetupError, reboot_system
from intel_driver_setup.system.checks import check_not_root, run_preliminary_checks
from intel_driver_setup.system.environment import prepare_environment, cleanup_temp_files
from intel_driver_setup.intel.gpu import install_gpu_drivers
from intel_driver_setup.intel.npu import install_npu_drivers, ArchiveFetcher, VendorInstallerRunner
from intel_driver_setup.intel.verify import verify_installations


# ---------------------------------------------------------------------------
# Stage identifiers (in execution order)
# ---------------------------------------------------------------------------

STAGE_PREFLIGHT = "preflight"
STAGE_ENVIRONMENT = "environment"
STAGE_GPU_DRIVERS = "gpu_drivers"
STAGE_NPU_DRIVERS = "npu_drivers"
STAGE_VERIFY = "verify"
STAGE_CLEANUP = "cleanup"
STAGE_COMPLETION = "completion"

PIPELINE: tuple[str, ...] = (
    STAGE_PREFLIGHT,
    STAGE_ENVIRONMENT,
    STAGE_GPU_DRIVERS,
    STAGE_NPU_DRIVERS,
    STAGE_VERIFY,
    STAGE_CLEANUP,
    STAGE_COMPLETION,
)

# Stages whose failures are reported as warnings instead of aborting the run.
_ADVISORY_STAGES: set[str] = {STAGE_VERIFY}


def show_banner() -> None:
    """Display welcome banner and what will be installed."""
    print("=" * 64)
    log_header("🚀 Intel GPU & NPU Driver Installation")
    log_header("📋 For Ubuntu 24.04 LTS")
    print("=" * 64)
    print()
    log_info("This installer will set up:")
    log_detail("Intel GPU drivers and OpenCL support")
    log_detail("Intel media acceleration drivers (VA-API)")
    log_detail("Intel NPU (Neural Processing Unit) drivers")
    log_detail("Required libraries and tools")
    print()


def warn_release_drift(config) -> None:
    """Report mismatches in the NPU download descriptor."""
    for problem in config.npu_release.consistency_problems():
        log_warn(problem)


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------

def display_completion(config, confirm, reboot=reboot_system) -> bool:
    """Show the summary and offer a reboot.

    Returns:
        bool: True if a reboot was triggered
    """
    log_step("🎉 Driver Installation Complete!")
    print()
    log_success("Intel GPU and NPU drivers have been successfully installed.")
    print()
    log_info("Next steps:")
    log_detail("Log out and log back in to apply group membership changes")
    log_detail("Or reboot your system for full driver activation")
    log_detail("Test GPU acceleration with: clinfo")
    log_detail("Test media acceleration with: vainfo")
    log_detail(f"Check NPU status with: lsmod | grep {config.npu_kernel_module}")
    print()
    log_warn("Some features may require a system reboot to function properly.")
    print()

    if confirm("Do you want to reboot now?"):
        log_info("Rebooting system...")
        reboot()
        return True

    log_info("Remember to reboot or re-login when convenient.")
    log_info(f"You can apply group changes immediately with: newgrp {config.render_group}")
    return False


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def _execute_stage(stage, config, apt, fetcher, runner, confirm, reboot):
    """Dispatch a single pipeline stage by its ID."""
    if stage == STAGE_PREFLIGHT:
        return run_preliminary_checks(config)

    elif stage == STAGE_ENVIRONMENT:
        return prepare_environment(config, apt)

    elif stage == STAGE_GPU_DRIVERS:
        return install_gpu_drivers(config, apt)

    elif stage == STAGE_NPU_DRIVERS:
        return install_npu_drivers(config, apt, fetcher, runner)

    elif stage == STAGE_VERIFY:
        return verify_installations(config)

    elif stage == STAGE_CLEANUP:
        return cleanup_temp_files(config, confirm)

    elif stage == STAGE_COMPLETION:
        return display_completion(config, confirm, reboot)

    raise ValueError(f"Unknown stage: {stage}")


def run_installation(config, apt=None, fetcher=None, runner=None,
                     confirm=prompt_yes_no, reboot=reboot_system) -> dict:
    """Run every stage in order.

    Exceptions from fatal stages propagate and end the run; advisory
    stages downgrade them to a warning.

    Returns:
        dict: stage ID -> stage return value
    """
    apt = apt or AptManager()
    fetcher = fetcher or ArchiveFetcher()
    runner = runner or VendorInstallerRunner()

    outcomes = {}
    total = len(PIPELINE)
    for step, stage in enumerate(PIPELINE, 1):
        log_info(f"[{step}/{total}] {stage}")
        try:
            outcomes[stage] = _execute_stage(stage, config, apt, fetcher, runner, confirm, reboot)
        except Exception as e:
            if stage not in _ADVISORY_STAGES:
                raise
            log_warn(f"Stage {stage} did not complete: {e}")
            outcomes[stage] = None
        print()
    return outcomes


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    """Main installation process."""
    try:
        print("\033[2J\033[H", end="", flush=True)
        show_banner()

        check_not_root()

        config = default_config()
        warn_release_drift(config)

        log_step("🚀 Starting driver installation process...")
        run_installation(config)

    except KeyboardInterrupt:
        print()
        log_error("Installation interrupted by user")
        sys.exit(1)
    except SetupError as e:
        log_error(f"Installation aborted: {e}")
        sys.exit(1)
    except Exception as e:
        log_error(f"Installation failed: {str(e)}")
        log_error(f"Traceback: {traceback.format_exc()}")
        sys.exit(1)


if __name__ == "__main__":
    main()
