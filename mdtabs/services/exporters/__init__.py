"""Exporter strategies and registry."""

from .base import ExporterRegistryInst
from .html_exporter import HtmlExporter

__all__ = ["ExporterRegistryInst", "HtmlExporter"]
