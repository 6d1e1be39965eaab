"""Readers for process and host statistics: CPU load, memory, file descriptors, tasks, network pools, host and system info."""

__version__ = "0.1.0"

__all__ = [
    "types",
    "fds",
    "cpu",
    "cpuburn",
    "tasks",
    "network",
    "memory",
    "hostinfo",
    "sysinfo",
]