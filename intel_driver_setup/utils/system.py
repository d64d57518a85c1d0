"""System utilities for command execution, package management and host queries"""

import getpass
import glob
import os
import shlex
import shutil
import subprocess
from .logging import log_info, log_error


class SetupError(Exception):
    """A fatal condition detected by the installer itself (not by a command)"""


def run_command(cmd, shell=True, check=True, capture_output=False, cwd=None):
    """
    Execute a system command with logging

    Args:
        cmd: Command to execute (string or list; lists are shell-quoted)
        shell: Whether to use shell
        check: Whether to raise exception on failure
        capture_output: Whether to capture and return output
        cwd: Working directory for the command

    Returns:
        CompletedProcess object or output string if capture_output=True
    """
    if shell and isinstance(cmd, (list, tuple)):
        cmd = shlex.join(str(part) for part in cmd)

    log_info(f"Running: {cmd}")

    try:
        if capture_output:
            result = subprocess.run(cmd, shell=shell, check=check,
                                    capture_output=True, text=True,
                                    stdin=subprocess.DEVNULL, cwd=cwd)
            return result.stdout.strip()
        else:
            result = subprocess.run(cmd, shell=shell, check=check,
                                    stdin=subprocess.DEVNULL, cwd=cwd)
            return result
    except subprocess.CalledProcessError:
        log_error(f"Command failed: {cmd}")
        raise


class AptManager:
    """Manages apt operations through sudo with index-refresh caching"""

    def __init__(self):
        self._update_done = False

    def update(self, force=False):
        """Refresh the package index unless already done in this run"""
        if force or not self._update_done:
            run_command("sudo apt-get update")
            self._update_done = True

    def reset_cache(self):
        """Make the next update() call re-run apt-get update.

        Call this after adding new repositories so packages from
        those repos can be discovered.
        """
        self._update_done = False

    def install(self, *packages):
        """Install packages non-interactively"""
        self.update()
        package_list = ' '.join(shlex.quote(p) for p in packages)
        run_command(f"sudo env DEBIAN_FRONTEND=noninteractive "
                    f"apt-get install -y {package_list}")

    def add_repository(self, source):
        """Register a package source (PPA); re-adding an existing one is a no-op"""
        run_command(f"sudo add-apt-repository -y {shlex.quote(source)}")
        self.reset_cache()


def is_root():
    """Check whether the effective user is root"""
    return os.geteuid() == 0


def command_exists(name):
    """Check whether an executable is on PATH"""
    return shutil.which(name) is not None


_OS_RELEASE_FILES = ('/etc/os-release', '/etc/lsb-release')


def get_os_info(paths=_OS_RELEASE_FILES):
    """Get OS information from /etc/os-release, falling back to /etc/lsb-release

    Undecodable bytes are replaced rather than raised; the result only
    feeds advisory checks.
    """
    for path in paths:
        try:
            with open(path, 'r', errors='replace') as f:
                lines = f.readlines()
        except OSError:
            continue

        info = {}
        for line in lines:
            if '=' in line:
                key, value = line.strip().split('=', 1)
                info[key] = value.strip('"')
        if info:
            return info
    return {}


def list_pci_devices():
    """Return raw lspci output; raises if lspci is missing or fails"""
    return run_command("lspci", capture_output=True)


def get_invoking_user():
    """Name of the user who launched the installer"""
    return os.environ.get("USER") or getpass.getuser()


def get_user_groups(user):
    """Return the list of group names the user belongs to"""
    output = run_command(["id", "-nG", user], capture_output=True)
    return output.split()


def user_in_group(user, group):
    """Check group membership as recorded by the system"""
    return group in get_user_groups(user)


def add_user_to_group(user, group):
    """Add a user to a group with gpasswd.

    Returns:
        True if the user was added, False if already a member.
    """
    if user_in_group(user, group):
        log_info(f"User {user} is already a member of the {group} group")
        return False
    run_command(["sudo", "gpasswd", "-a", user, group])
    return True


def kernel_module_loaded(module):
    """Check lsmod for a loaded kernel module"""
    output = run_command("lsmod", capture_output=True)
    for line in output.splitlines()[1:]:
        parts = line.split()
        if parts and parts[0] == module:
            return True
    return False


def find_device_nodes(patterns):
    """Return sorted device paths matching any of the glob patterns"""
    found = set()
    for pattern in patterns:
        for path in glob.glob(pattern):
            if not os.path.isdir(path):
                found.add(path)
    return sorted(found)


def reboot_system():
    """Reboot immediately via sudo"""
    run_command("sudo reboot")
