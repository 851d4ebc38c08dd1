"""Maximizer CRM connector for workflow-automation hosts."""

__version__ = "0.1.0"
