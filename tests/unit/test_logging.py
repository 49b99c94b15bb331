# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.
"""Unit tests for structured logging and the MCP App shells."""

import json
import logging

from wpmcp.core.logging import StructuredFormatter
from wpmcp.protocol.apps import build_app_html


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("wpmcp.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_basic_fields(self):
        entry = json.loads(StructuredFormatter().format(_record()))
        assert entry["level"] == "INFO"
        assert entry["module"] == "wpmcp.test"
        assert entry["message"] == "hello world"
        assert "tenant_slug" not in entry

    def test_tenant_context(self):
        entry = json.loads(StructuredFormatter().format(_record(tenant_slug="acme", trace_id="t1")))
        assert entry["tenant_slug"] == "acme"
        assert entry["trace_id"] == "t1"


class TestAppShell:
    def test_iframe_points_at_gateway(self):
        html = build_app_html("https://gw.example.com/", "post-detail", "Post <Detail>")
        assert 'src="https://gw.example.com/api/mcp-apps/post-detail"' in html
        assert "Post &lt;Detail&gt;" in html
