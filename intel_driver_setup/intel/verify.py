"""Post-install verification.

Every check is advisory and independent: a failing or crashing check
becomes a warning and the remaining checks still run.
"""

from dataclasses import dataclass, field

from ..utils.logging import log_info, log_warn, log_step, log_success
from ..utils.system import (
    run_command,
    command_exists,
    user_in_group,
    kernel_module_loaded,
    find_device_nodes,
)


@dataclass
class CheckResult:
    name: str
    passed: bool
    message: str


@dataclass
class VerificationReport:
    """Outcome of the verification stage"""
    results: list[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def warnings(self) -> list[str]:
        return [r.message for r in self.results if not r.passed]

    def record(self, name: str, passed: bool, message: str) -> None:
        self.results.append(CheckResult(name, passed, message))
        if passed:
            log_success(message)
        else:
            log_warn(message)


def _check_tool(report, tool, label, heading, check_cmd, missing_msg, failed_msg):
    """Check a diagnostic CLI is installed, then run it best-effort."""
    if not command_exists(tool):
        report.record(tool, False, missing_msg)
        return

    log_success(f"{label} ({tool}) installed successfully")
    log_info(heading)
    result = run_command(check_cmd, check=False)
    if result.returncode != 0:
        report.record(tool, False, failed_msg)
    else:
        report.record(tool, True, f"{tool} ran successfully")


def check_opencl(config, report):
    log_info("Checking GPU driver installation...")
    _check_tool(
        report, "clinfo", "OpenCL tools", "OpenCL devices detected:", "clinfo -l 2>/dev/null",
        "clinfo not found - GPU drivers may not be properly installed",
        "No OpenCL devices found or error querying devices",
    )


def check_vaapi(config, report):
    _check_tool(
        report, "vainfo", "VA-API tools", "VA-API information:", "vainfo 2>/dev/null",
        "vainfo not found - media acceleration may not work",
        "VA-API driver issues detected",
    )


def check_render_group(config, report):
    if user_in_group(config.user, config.render_group):
        report.record("render_group", True,
                      f"User {config.user} is member of {config.render_group} group")
    else:
        report.record("render_group", False,
                      f"User {config.user} is not in {config.render_group} group "
                      "- this may affect GPU access")


def check_npu_module(config, report):
    log_info("Checking NPU driver installation...")
    if kernel_module_loaded(config.npu_kernel_module):
        report.record("npu_module", True, "Intel VPU/NPU kernel module loaded")
    else:
        report.record("npu_module", False,
                      "Intel VPU/NPU kernel module not loaded "
                      "- may require reboot or unsupported hardware")


def check_npu_device_nodes(config, report):
    nodes = find_device_nodes(config.device_node_patterns)
    if nodes:
        report.record("npu_device", True, f"NPU device nodes found: {' '.join(nodes)}")
    else:
        report.record("npu_device", False,
                      "No NPU device nodes found - may require reboot or unsupported hardware")


VERIFICATION_CHECKS = (
    ("clinfo", check_opencl),
    ("vainfo", check_vaapi),
    ("render_group", check_render_group),
    ("npu_module", check_npu_module),
    ("npu_device", check_npu_device_nodes),
)


def verify_installations(config, checks=VERIFICATION_CHECKS):
    """Run every verification check, isolating each one's failures.

    Returns:
        VerificationReport
    """
    log_step("✅ Verifying driver installations...")

    report = VerificationReport()
    for name, check in checks:
        try:
            check(config, report)
        except Exception as e:
            report.record(name, False, f"Could not complete {name} check: {e}")

    if report.passed:
        log_success("All verification checks passed")
    else:
        log_warn(f"{len(report.warnings)} verification check(s) reported warnings")
    return report
