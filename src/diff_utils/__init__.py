"""Shared building blocks for the PDF comparison pipeline: extraction, page and
table comparison, policies, result models and report rendering."""
