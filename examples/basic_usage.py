#!/usr/bin/env python3
"""Basic usage example"""

from retain_logger import Logger, LoggerBuilder


def main():
    # Default console routing: errors to stderr, everything else to stdout
    logger = Logger()
    logger.info("Application started", {"pid_file": "/tmp/app.pid"})
    logger.warn("Disk usage at", 91, "%")
    logger.debug_level(2, "Only shown when the debug cutoff allows it")

    # File targets plus hold-and-release for a remote debugging session
    logger = (LoggerBuilder()
        .with_target("error,fatal", "?consoleerror")
        .with_target("!trace", "app-%L.log", "%T [%L] %m%E")
        .with_log_location("logs/")
        .with_keep_last(50)
        .with_debug(True, level=3)
        .build())

    logger.info("Connected to", "db01")
    logger.debug_level(5, "too detailed, dropped")
    logger.error("Query failed", {"code": 1205})
    logger.file("logs/audit.log", "user", "alice", "logged in")

    # Release what was held
    logger.display_entries(logger.get_entries(), reversed=True)


if __name__ == "__main__":
    main()
