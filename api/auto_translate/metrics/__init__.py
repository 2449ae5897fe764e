"""Centralized metrics module for Prometheus instrumentation.

This package consolidates all Prometheus metrics definitions:
- translation_metrics: dictionary cache, translation and provider metrics

Usage:
    from auto_translate.metrics.translation_metrics import dictionary_lookups_total
"""

from auto_translate.metrics import translation_metrics

__all__ = [
    "translation_metrics",
]
