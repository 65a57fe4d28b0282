# Core modules initialization
