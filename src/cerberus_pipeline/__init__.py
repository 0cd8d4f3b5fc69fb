"""
Cerberus Pipeline - dossier extraction and entity graph construction

Converts human-authored corruption dossiers, entity profiles, legislation
trackers and FocusPoint leads from markdown into typed records, resolves
free-text entity mentions and builds the relationship graph.
"""

__version__ = "0.1.0"
