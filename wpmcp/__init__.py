# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""WPMCP — turns any WordPress site into a tenant-routed MCP server."""

__version__ = "0.1.0"
