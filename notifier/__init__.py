"""
notifier — pluggable notification dispatch.

Sub-packages:
    core/           — settings, logging, error hierarchy
    notifications/  — channels, registry, decorators, routing, fan-out
"""

__version__ = "1.0.0"
