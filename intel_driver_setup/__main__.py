"""Allow running as python3 -m intel_driver_setup"""

from intel_driver_setup.cli import main

if __name__ == "__main__":
    main()
