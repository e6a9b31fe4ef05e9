from __future__ import annotations


class ScoringError(Exception):
	"""Base class for failures raised while scoring an exam."""


class InvalidInput(ScoringError):
	"""The request does not carry a usable list of answers."""


class RemoteUnavailable(ScoringError):
	"""The external scorer could not be reached or answered with garbage."""


class RemoteLogicError(ScoringError):
	"""The external scorer answered but reported status "error"."""
