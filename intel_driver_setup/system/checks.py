"""System checks and validation

Only the root check can stop the run. Everything else here is advisory.
"""

import re
import subprocess

from ..utils.logging import log_info, log_warn, log_error, log_step, log_success
from ..utils.system import SetupError, is_root, get_os_info, list_pci_devices

_DISPLAY_CLASS = re.compile(r'vga|3d|display', re.IGNORECASE)
_NPU_HINT = re.compile(r'processing.*intel|ai.*intel|npu', re.IGNORECASE)


def check_not_root():
    """Refuse to run as root; privileged commands go through sudo individually."""
    if is_root():
        log_error("This installer should not be run as root for safety reasons.")
        log_error("It will prompt for sudo when needed.")
        raise SetupError("refusing to run as root")


def check_os_version(config):
    """Warn when the host is not the Ubuntu release this installer targets.

    Returns:
        bool: True if the expected version was found
    """
    os_info = get_os_info()
    candidates = [
        os_info.get('VERSION_ID', ''),
        os_info.get('DISTRIB_RELEASE', ''),
        os_info.get('PRETTY_NAME', ''),
        os_info.get('DISTRIB_DESCRIPTION', ''),
    ]
    if any(config.expected_os_version in value for value in candidates):
        log_info(f"Ubuntu {config.expected_os_version} detected")
        return True

    log_warn(f"This installer is designed for Ubuntu {config.expected_os_version}. "
             "Proceeding anyway...")
    return False


def check_intel_gpu(pci_output):
    """Look for an Intel display-class device in lspci output"""
    for line in pci_output.splitlines():
        if _DISPLAY_CLASS.search(line) and 'intel' in line.lower():
            log_success("Intel GPU detected")
            return True

    log_warn("Intel GPU not clearly detected. "
             "Installation will continue but may not be effective.")
    return False


def check_intel_npu(pci_output):
    """Look for NPU-like hardware in lspci output"""
    if _NPU_HINT.search(pci_output):
        log_success("Intel NPU-compatible hardware detected")
        return True

    log_info("NPU hardware detection inconclusive - proceeding with installation")
    return False


def run_preliminary_checks(config):
    """Run the advisory compatibility checks.

    Returns:
        dict: check name -> bool result
    """
    log_step("🔍 Checking system compatibility...")

    results = {'os_version': check_os_version(config)}

    try:
        pci_output = list_pci_devices()
    except (OSError, subprocess.CalledProcessError) as e:
        log_warn(f"Could not list PCI devices ({e}); skipping hardware detection")
        results['intel_gpu'] = False
        results['intel_npu'] = False
    else:
        results['intel_gpu'] = check_intel_gpu(pci_output)
        results['intel_npu'] = check_intel_npu(pci_output)

    log_success("System compatibility check completed")
    return results
