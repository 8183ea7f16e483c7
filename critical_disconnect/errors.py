"""
Error types raised by the analysis pipeline.
"""


class DataLoadError(Exception):
	"""The source CSV is missing, unreadable, or lacks required columns."""


class MissingFieldError(Exception):
	"""A record lacks a field needed by a later stage."""

	def __init__(self, record_id: str, field_name: str):
		self.record_id = record_id
		self.field_name = field_name
		super().__init__(f"Record {record_id!r} has no value for '{field_name}'")
