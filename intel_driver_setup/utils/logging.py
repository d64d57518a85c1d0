"""Logging utilities for Intel Driver Setup"""


class Colors:
    """ANSI color codes for terminal output"""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    RED = '\033[0;31m'
    GREEN = '\033[0;32m'
    YELLOW = '\033[1;33m'
    BLUE = '\033[0;34m'
    PURPLE = '\033[0;35m'
    CYAN = '\033[1;36m'


def log_info(message):
    """Log info message in blue"""
    print(f"{Colors.BLUE}[INFO]{Colors.RESET} {message}")


def log_success(message):
    """Log success message in green"""
    print(f"{Colors.GREEN}[SUCCESS]{Colors.RESET} {message}")


def log_warn(message):
    """Log warning message in yellow"""
    print(f"{Colors.YELLOW}[WARNING]{Colors.RESET} {message}")


def log_error(message):
    """Log error message in red"""
    print(f"{Colors.RED}[ERROR]{Colors.RESET} {message}")


def log_prompt(message):
    """Log prompt message in cyan, leaving the cursor on the same line"""
    print(f"{Colors.CYAN}[INPUT]{Colors.RESET} {message}", end='', flush=True)


def log_header(message):
    """Log a section header in purple"""
    print(f"{Colors.PURPLE}{message}{Colors.RESET}")


def log_step(message):
    """Log step message in bold purple with newline before"""
    print(f"\n{Colors.BOLD}{Colors.PURPLE}{message}{Colors.RESET}")


def log_detail(message):
    """Log an indented bullet line"""
    print(f"  • {message}")
