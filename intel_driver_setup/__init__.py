"""Intel Driver Setup - Main package

Installs Intel GPU (compute, OpenCL, VA-API media) and NPU drivers
on Ubuntu 24.04 and verifies the result.
"""

__version__ = "1.0.0"
__package_name__ = "intel-driver-setup"
