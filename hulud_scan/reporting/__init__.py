"""Result aggregation and report rendering."""

from .aggregator import aggregate
from .render import render_json, render_project, render_project_list, render_summary

__all__ = [
    "aggregate",
    "render_json",
    "render_project",
    "render_project_list",
    "render_summary",
]
